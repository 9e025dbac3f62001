"""Errors that abort a compatibility check run."""


class CompatibilityCheckError(Exception):
    """Base exception for fatal compatibility check errors."""
    pass


class ResolutionError(CompatibilityCheckError):
    """Raised when a local schema file cannot be read or parsed."""
    def __init__(self, path: str, cause: BaseException, message: str | None = None):
        self.path = path
        self.cause = cause
        detail = message or f"Unable to resolve schema file {path}"
        super().__init__(f"{detail}: {cause}")


class RemoteError(CompatibilityCheckError):
    """Raised when the schema registry cannot be reached or answers with an error."""
    def __init__(self, message: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"{message}: {cause}")


class InvalidSubjectPatternError(CompatibilityCheckError, ValueError):
    """Raised when the subject naming pattern cannot be used for matching."""
    pass
