"""Exception types for CodeTools."""


class CodeToolsError(Exception):
    """Base exception for CodeTools errors."""

    pass


class CollaboratorError(CodeToolsError):
    """An external minifier, formatter or classifier failed."""

    pass


class FormatterBackendError(CollaboratorError):
    """The remote formatter backend could not be reached or rejected the request.

    Raised by the HTTP formatter backend and caught by the formatter service,
    which then returns the input text unchanged.
    """

    pass


class AuthenticationError(CodeToolsError):
    """A request signature could not be verified.

    The message is safe to return to the caller.
    """

    @property
    def reason(self) -> str:
        return str(self)
