"""Usage checks shared by the shape classifier and the accessor renaming."""

from __future__ import annotations

from typing import NoReturn

from destructure.exceptions import UsageError


def usage_error(reason: str, **context: object) -> NoReturn:
    """Raise a UsageError carrying ``context`` as metadata.

    The context payload is attached for diagnostics only; nothing inspects it
    to decide control flow.
    """
    raise UsageError(reason, context=context)


def require_field_identifier(key: object) -> str:
    match key:
        case str() as text if text:
            return text
        case str():
            usage_error(
                "field identifiers must have at least one character",
                key=key,
            )
        case _:
            usage_error(
                "field identifiers must be strings",
                key=key,
                kind=type(key).__name__,
            )
