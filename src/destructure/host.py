"""A minimal host for derived accessors.

``StateCell`` owns one composite value and commits whole-container updates
the way a UI state hook does: an update is either a literal replacement or a
transform of the previous value, and updates issued inside ``batch()`` are
queued and applied in invocation order when the batch closes, each transform
receiving the result of the one before it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager

from destructure.accessor_contract import CacheEventCallback, Mutator, Update
from destructure.destructuring import destructure, destructure_fixed
from destructure.site import AccessorSlot
from destructure.synthesis import resolve_update

Listener = Callable[[object, object], None]


class StateCell:
    def __init__(self, initial: object):
        self._value = initial
        self._queue: list[Update] | None = None
        self._listeners: list[Listener] = []
        self.commits = 0

    @property
    def value(self) -> object:
        return self._value

    def set_state(self, update: Update) -> None:
        if self._queue is not None:
            self._queue.append(update)
            return
        self._commit([update])

    @contextmanager
    def batch(self) -> Iterator[None]:
        if self._queue is not None:
            # Nested batches flush with the outermost one.
            yield
            return
        self._queue = []
        try:
            yield
        finally:
            queued, self._queue = self._queue, None
            self._commit(queued)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def destructure(
        self,
        slot: AccessorSlot,
        *,
        on_cache_event: CacheEventCallback | None = None,
    ) -> tuple[tuple[object, ...], ...] | Mapping[str, Mutator]:
        return destructure(slot, self._value, self.set_state, on_cache_event=on_cache_event)

    def destructure_fixed(
        self,
        slot: AccessorSlot,
        *,
        on_cache_event: CacheEventCallback | None = None,
    ) -> tuple[tuple[object, ...], ...]:
        return destructure_fixed(
            slot,
            self._value,  # type: ignore[arg-type]
            self.set_state,
            on_cache_event=on_cache_event,
        )

    def _commit(self, updates: list[Update]) -> None:
        if not updates:
            return
        previous = self._value
        value = previous
        for update in updates:
            value = resolve_update(update, value)
        self.commits += 1
        if value is previous:
            return
        self._value = value
        for listener in list(self._listeners):
            listener(previous, value)
