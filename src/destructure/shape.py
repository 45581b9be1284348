from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from destructure.invariants import require_field_identifier, usage_error


class ShapeKind(str, Enum):
    SEQUENCE = "sequence"
    RECORD = "record"


@dataclass(frozen=True)
class SequenceShape:
    items: Sequence[object]

    @property
    def kind(self) -> ShapeKind:
        return ShapeKind.SEQUENCE

    @property
    def length(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class RecordShape:
    record: Mapping[str, object]
    keys: tuple[str, ...]

    @property
    def kind(self) -> ShapeKind:
        return ShapeKind.RECORD


Shape: TypeAlias = SequenceShape | RecordShape


def classify_shape(composite: object) -> Shape:
    """Decide once whether ``composite`` is bound as a sequence or a record.

    Text and byte strings are scalars here even though they are sequences.
    Anything that is neither a mapping nor a non-text sequence is rejected.
    """
    match composite:
        case None:
            usage_error(
                "destructure() can only accept sequences and mappings, got None",
                kind="NoneType",
            )
        case str() | bytes() | bytearray():
            usage_error(
                "destructure() does not bind text as a sequence",
                kind=type(composite).__name__,
            )
        case Mapping():
            keys = tuple(require_field_identifier(key) for key in composite)
            return RecordShape(record=composite, keys=keys)
        case Sequence():
            return SequenceShape(items=composite)
        case _:
            usage_error(
                "destructure() can only accept sequences and mappings",
                kind=type(composite).__name__,
            )
