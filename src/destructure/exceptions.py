"""Exception types raised by destructure."""

from __future__ import annotations


class UsageError(ValueError):
    """Raised when a caller hands destructure something it cannot bind.

    Usage errors are programming mistakes: a composite that is neither a
    sequence nor a mapping, or a field identifier the accessor renaming cannot
    apply to. They are raised synchronously and never retried.
    """

    def __init__(self, message: str, *, context: dict[str, object] | None = None):
        super().__init__(message)
        self.context = dict(context or {})

    @property
    def context_payload(self) -> dict[str, str]:
        return {str(key): repr(value) for key, value in self.context.items()}
