"""Per-call-site accessor state.

An ``AccessorSlot`` is the one mutable cell a call-site owns across calls. The
host creates it (directly, or through a ``SiteRegistry``) and passes the same
slot on every derivation for that site. A slot holds either a sequence cache
or a record cache, never both: when the composite kind seen at a site
changes, the slot silently discards its cache and gate state and starts over.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from destructure.accessor_contract import (
    AccessorCacheStats,
    CacheEventCallback,
    JSONObject,
    Setter,
)
from destructure.gate import RecomputationGate
from destructure.record_cache import DEFAULT_ACCESSOR_PREFIX, RecordAccessorCache
from destructure.sequence_cache import SequenceAccessorCache
from destructure.synthesis import SetterRef


class SlotVariant(str, Enum):
    SEQUENCE = "sequence"
    FIXED_SEQUENCE = "fixed_sequence"
    RECORD = "record"


@dataclass
class AccessorSlot:
    setter: SetterRef = field(default_factory=SetterRef)
    variant: SlotVariant | None = None
    cache: SequenceAccessorCache | RecordAccessorCache | None = None
    gate: RecomputationGate[object] = field(default_factory=RecomputationGate)
    reconciliations: int = 0
    resets: int = 0
    _retired_synthesized: int = 0
    _retired_dropped: int = 0

    def sequence_cache(
        self,
        *,
        setter: Setter,
        fixed: bool = False,
        on_cache_event: CacheEventCallback | None = None,
    ) -> SequenceAccessorCache:
        variant = SlotVariant.FIXED_SEQUENCE if fixed else SlotVariant.SEQUENCE
        self._narrow(variant, on_cache_event=on_cache_event)
        if self.cache is None:
            self.cache = SequenceAccessorCache(setter=self.setter)
        self.setter.bind(setter)
        return self.cache  # type: ignore[return-value]

    def record_cache(
        self,
        *,
        setter: Setter,
        prefix: str = DEFAULT_ACCESSOR_PREFIX,
        on_cache_event: CacheEventCallback | None = None,
    ) -> RecordAccessorCache:
        self._narrow(SlotVariant.RECORD, on_cache_event=on_cache_event)
        if self.cache is None:
            self.cache = RecordAccessorCache(setter=self.setter, prefix=prefix)
        self.setter.bind(setter)
        cache: RecordAccessorCache = self.cache  # type: ignore[assignment]
        cache.prefix = prefix
        return cache

    def stats(self) -> AccessorCacheStats:
        synthesized = self._retired_synthesized
        dropped = self._retired_dropped
        if self.cache is not None:
            synthesized += self.cache.synthesized
            dropped += self.cache.dropped
        return AccessorCacheStats(
            hits=self.gate.hits,
            misses=self.gate.misses,
            reconciliations=self.reconciliations,
            synthesized=synthesized,
            dropped=dropped,
            resets=self.resets,
        )

    def to_payload(self) -> JSONObject:
        stats = self.stats()
        return {
            "format_version": 1,
            "variant": None if self.variant is None else self.variant.value,
            "size": 0 if self.cache is None else len(self.cache),
            "stats": {
                "hits": stats.hits,
                "misses": stats.misses,
                "reconciliations": stats.reconciliations,
                "synthesized": stats.synthesized,
                "dropped": stats.dropped,
                "resets": stats.resets,
            },
        }

    def _narrow(
        self,
        variant: SlotVariant,
        *,
        on_cache_event: CacheEventCallback | None,
    ) -> None:
        if self.variant is variant:
            return
        if self.variant is not None:
            self.resets += 1
            if on_cache_event is not None:
                on_cache_event("site:reset", (self.variant.value, variant.value))
        if self.cache is not None:
            self._retired_synthesized += self.cache.synthesized
            self._retired_dropped += self.cache.dropped + len(self.cache)
        # Accessors handed out before the reset keep the old cell.
        self.setter = SetterRef(current=self.setter.current)
        self.gate.clear()
        self.cache = None
        self.variant = variant


@dataclass
class SiteRegistry:
    """Arena of accessor slots keyed by caller-chosen site ids."""

    _slots: dict[Hashable, AccessorSlot] = field(default_factory=dict)

    def slot_for(self, site_id: Hashable) -> AccessorSlot:
        slot = self._slots.get(site_id)
        if slot is None:
            slot = self._slots[site_id] = AccessorSlot()
        return slot

    def release(self, site_id: Hashable) -> bool:
        return self._slots.pop(site_id, None) is not None

    def clear(self) -> None:
        self._slots.clear()

    def __contains__(self, site_id: object) -> bool:
        return site_id in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._slots)


_GLOBAL_REGISTRY: object = None


def get_global_site_registry() -> SiteRegistry:
    global _GLOBAL_REGISTRY
    if _GLOBAL_REGISTRY is None:
        _GLOBAL_REGISTRY = SiteRegistry()
    return _GLOBAL_REGISTRY  # type: ignore[return-value]


def reset_global_site_registry() -> SiteRegistry:
    global _GLOBAL_REGISTRY
    registry = SiteRegistry()
    _GLOBAL_REGISTRY = registry
    return registry
