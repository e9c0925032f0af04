"""Exceptions raised by the `reactions` package.

All of them derive from `ReactionsError` and, at the same time, from the
builtin exception that best describes them. This way a failed lookup can be
caught as a `LookupError` and a malformed expression as a `SyntaxError`.
"""

from typing import Optional


class ReactionsError(Exception):
    """Base class of the errors raised by `reactions`."""


class DatabaseError(ReactionsError, RuntimeError):
    """The database table is missing, unreadable, malformed or inconsistent.

    Also raised when registering an element whose name or ID is already taken.
    """


class MissingElementError(ReactionsError, LookupError):
    """No element with the requested name or ID exists in the database."""


class ProcessSyntaxError(ReactionsError, SyntaxError):
    """A reaction or decay expression is not well formed.

    The offending expression is stored in `text` and the column where the
    error was detected in `offset`. As for `SyntaxError`, the first column is
    1, and expressions span a single line.
    """

    def __init__(
        self, message: str, text: str = "", offset: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.msg = message
        self.text = text
        self.offset = offset
        self.lineno = 1 if text else None

    def __str__(self) -> str:
        if not self.text or self.offset is None:
            return self.msg
        return f"{self.msg}:\n{self.text}\n{' ' * (self.offset - 1)}^"
