from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from destructure.accessor_contract import CacheEventCallback, SequenceSlot
from destructure.synthesis import (
    SetterRef,
    synthesize_element_mutator,
    synthesize_remover,
)


@dataclass
class SequenceAccessorCache:
    """Position-keyed accessor slots for one sequence call-site.

    Slot identity follows position, not value: after a mid-sequence removal
    the slot at the removed position addresses its new occupant and the list
    loses its tail slot. Consumers that re-key rendered items must key them by
    value, not by accessor identity.
    """

    setter: SetterRef
    slots: tuple[SequenceSlot, ...] = ()
    synthesized: int = 0
    dropped: int = 0

    def reconcile(
        self,
        *,
        length: int,
        on_cache_event: CacheEventCallback | None = None,
    ) -> tuple[SequenceSlot, ...]:
        current = len(self.slots)
        if current == length:
            return self.slots
        kept = self.slots[: min(current, length)]
        if current > length:
            self.dropped += current - length
            if on_cache_event is not None:
                on_cache_event("sequence:truncate", (current, length))
        appended = tuple(
            SequenceSlot(
                position=position,
                mutator=synthesize_element_mutator(self.setter, position),
                remover=synthesize_remover(self.setter, position),
            )
            for position in range(current, length)
        )
        if appended:
            self.synthesized += len(appended)
            if on_cache_event is not None:
                on_cache_event("sequence:extend", (current, length))
        self.slots = kept + appended
        return self.slots

    def __len__(self) -> int:
        return len(self.slots)


def bind_elements(
    items: Sequence[object],
    slots: tuple[SequenceSlot, ...],
) -> tuple[tuple[object, ...], ...]:
    return tuple(
        (value, slot.mutator, slot.remover)
        for value, slot in zip(items, slots, strict=True)
    )


def bind_fixed_elements(
    items: Sequence[object],
    slots: tuple[SequenceSlot, ...],
) -> tuple[tuple[object, ...], ...]:
    return tuple(
        (value, slot.mutator)
        for value, slot in zip(items, slots, strict=True)
    )
