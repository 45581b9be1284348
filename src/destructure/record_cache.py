from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from destructure.accessor_contract import CacheEventCallback, FieldEntry, Mutator
from destructure.invariants import require_field_identifier, usage_error
from destructure.synthesis import SetterRef, synthesize_field_mutator

DEFAULT_ACCESSOR_PREFIX = "set"


def capitalize_identifier(key: str) -> str:
    # Only the first character changes; str.capitalize() would lower the rest.
    text = require_field_identifier(key)
    return text[0].upper() + text[1:]


def accessor_name(key: str, *, prefix: str = DEFAULT_ACCESSOR_PREFIX) -> str:
    return f"{prefix}{capitalize_identifier(key)}"


def check_accessor_names(
    keys: Iterable[str],
    *,
    prefix: str = DEFAULT_ACCESSOR_PREFIX,
) -> dict[str, str]:
    """Map each key to its accessor name, rejecting keys that collide."""
    names: dict[str, str] = {}
    owners: dict[str, str] = {}
    for key in keys:
        name = accessor_name(key, prefix=prefix)
        owner = owners.setdefault(name, key)
        if owner != key:
            usage_error(
                "field identifiers collide on the same accessor name",
                accessor=name,
                keys=(owner, key),
            )
        names[key] = name
    return names


@dataclass
class RecordAccessorCache:
    """Key-addressed field mutators for one record call-site.

    Each reconciliation builds a fresh mapping holding exactly the current
    keys, so mutators for removed keys become unreachable and a key that
    disappears and later returns gets a newly synthesized mutator.
    """

    setter: SetterRef
    prefix: str = DEFAULT_ACCESSOR_PREFIX
    entries: dict[str, FieldEntry] = field(default_factory=dict)
    synthesized: int = 0
    dropped: int = 0

    def reconcile(
        self,
        *,
        keys: Iterable[str],
        on_cache_event: CacheEventCallback | None = None,
    ) -> dict[str, FieldEntry]:
        previous = self.entries
        entries: dict[str, FieldEntry] = {}
        for key, name in check_accessor_names(keys, prefix=self.prefix).items():
            entry = previous.get(key)
            if entry is None:
                entry = FieldEntry(
                    key=key,
                    accessor_name=name,
                    mutator=synthesize_field_mutator(self.setter, key),
                )
                self.synthesized += 1
                if on_cache_event is not None:
                    on_cache_event("record:synthesize", key)
            elif entry.accessor_name != name:
                entry = replace(entry, accessor_name=name)
            entries[key] = entry
        for key in previous:
            if key not in entries:
                self.dropped += 1
                if on_cache_event is not None:
                    on_cache_event("record:drop", key)
        self.entries = entries
        return entries

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


def bind_fields(entries: Mapping[str, FieldEntry]) -> Mapping[str, Mutator]:
    return MappingProxyType(
        {entry.accessor_name: entry.mutator for entry in entries.values()}
    )
