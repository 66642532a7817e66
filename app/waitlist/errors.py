class WaitlistError(Exception):
    pass


class SignupValidationError(WaitlistError):
    def __init__(self, fields: dict[str, str]) -> None:
        super().__init__(", ".join(sorted(fields)))
        self.fields = fields


class SignupNotFoundError(WaitlistError):
    pass


class SignupConflictError(WaitlistError):
    pass


class MissionUnknownError(WaitlistError):
    pass


class WaitlistStorageError(WaitlistError):
    pass
