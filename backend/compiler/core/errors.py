"""Domain errors raised by the services and translated to HTTP by the routers."""


class CompilerError(Exception):
    pass


class ValidationError(CompilerError):
    """A run request is missing required fields or carries bad values."""


class UnsupportedLanguage(ValidationError):
    def __init__(self, language: str | None, supported: tuple[str, ...]):
        self.language = language
        self.supported = supported
        super().__init__(f"Invalid language. Supported: {', '.join(supported)}")


class UpstreamExecutionError(CompilerError):
    """The model provider call failed (network, auth, rate limit, missing key)."""


class PersistenceUnavailable(CompilerError):
    """The submission could not be written; callers treat this as non-fatal."""


class NotFound(CompilerError):
    pass
