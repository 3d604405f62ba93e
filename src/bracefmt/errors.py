## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class FormatError(Exception):
    def __init__(self, message: str = "", *, format: str | None = None, position: int | None = None):
        """Base class for all errors raised or reported by bracefmt."""
        super().__init__(message)
        self.format: str | None = format
        self.position: int | None = position

    def __str__(self):
        message = super().__str__()
        if self.position is not None:
            return f"format error at position {self.position}: {message}"
        return f"format error: {message}"


class UnexpectedClosingBrace(FormatError):
    pass

class UnclosedBrace(FormatError):
    pass


class RenderError(FormatError, RuntimeError):
    """A registered formatter or verb failed while rendering a placeholder."""
    def __init__(self, message: str = "", *, format: str | None = None, placeholder: str | None = None):
        super().__init__(message, format=format)
        self.placeholder = placeholder


class RegistrationError(FormatError, TypeError):
    pass


class FormattedError(FormatError):
    """Exception whose message was produced by rendering a template."""
    def __str__(self):
        return self.args[0] if self.args else ""
