from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias


JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]

# A literal replacement or a transform of the previous value.
Update: TypeAlias = object | Callable[[object], object]
Setter: TypeAlias = Callable[[Update], None]
Mutator: TypeAlias = Callable[[Update], None]
Remover: TypeAlias = Callable[[], None]
CacheEventCallback: TypeAlias = Callable[[str, object], None]


@dataclass(frozen=True)
class SequenceSlot:
    position: int
    mutator: Mutator
    remover: Remover


@dataclass(frozen=True)
class FieldEntry:
    key: str
    accessor_name: str
    mutator: Mutator


@dataclass(frozen=True)
class AccessorCacheStats:
    hits: int
    misses: int
    reconciliations: int
    synthesized: int
    dropped: int
    resets: int
