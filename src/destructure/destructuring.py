"""Entry points deriving per-element and per-field accessors.

``destructure(slot, composite, set_whole)`` returns, for a sequence, a tuple
of ``(value, mutator, remover)`` rows aligned with the sequence and, for a
mapping, a read-only mapping from ``set<Key>`` accessor names to field
mutators. Accessors keep their identity across calls while their position or
key persists, so callers can compare them with ``is`` to skip dependent work.

Sequence accessors are identified by position. A caller that re-keys rendered
rows must derive the key from the row value, not from the accessor.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from destructure.accessor_contract import CacheEventCallback, Mutator, Setter
from destructure.config import get_global_naming
from destructure.fingerprint import fingerprint_keys
from destructure.invariants import usage_error
from destructure.record_cache import bind_fields, check_accessor_names
from destructure.schema import AccessorNamingConfig
from destructure.sequence_cache import bind_elements, bind_fixed_elements
from destructure.shape import RecordShape, SequenceShape, classify_shape
from destructure.site import AccessorSlot


def destructure(
    slot: AccessorSlot,
    composite: object,
    set_whole: Setter,
    *,
    naming: AccessorNamingConfig | None = None,
    on_cache_event: CacheEventCallback | None = None,
) -> tuple[tuple[object, ...], ...] | Mapping[str, Mutator]:
    match classify_shape(composite):
        case SequenceShape() as shape:
            return _derive_sequence(
                slot,
                shape,
                set_whole,
                fixed=False,
                on_cache_event=on_cache_event,
            )
        case RecordShape() as shape:
            return _derive_record(
                slot,
                shape,
                set_whole,
                naming=naming if naming is not None else get_global_naming(),
                on_cache_event=on_cache_event,
            )


def destructure_fixed(
    slot: AccessorSlot,
    composite: Sequence[object],
    set_whole: Setter,
    *,
    on_cache_event: CacheEventCallback | None = None,
) -> tuple[tuple[object, ...], ...]:
    """Derive ``(value, mutator)`` pairs for a sequence whose length is fixed.

    Behaves like ``destructure`` on a sequence but omits removers. A mapping
    is a usage error here. A slot used with both ``destructure_fixed`` and
    ``destructure`` resets its cache on each switch, as on a kind change.
    """
    match classify_shape(composite):
        case SequenceShape() as shape:
            return _derive_sequence(
                slot,
                shape,
                set_whole,
                fixed=True,
                on_cache_event=on_cache_event,
            )
        case RecordShape():
            usage_error(
                "destructure_fixed() only accepts sequences",
                kind=type(composite).__name__,
            )


def _derive_sequence(
    slot: AccessorSlot,
    shape: SequenceShape,
    set_whole: Setter,
    *,
    fixed: bool,
    on_cache_event: CacheEventCallback | None,
) -> tuple[tuple[object, ...], ...]:
    cache = slot.sequence_cache(
        setter=set_whole,
        fixed=fixed,
        on_cache_event=on_cache_event,
    )
    bind = bind_fixed_elements if fixed else bind_elements

    def _reconcile() -> tuple[tuple[object, ...], ...]:
        slot.reconciliations += 1
        slots = cache.reconcile(length=shape.length, on_cache_event=on_cache_event)
        return bind(shape.items, slots)

    return slot.gate.derive(
        identity_inputs=(shape.items,),
        value_inputs=(set_whole,),
        compute_fn=_reconcile,
        on_cache_event=on_cache_event,
    )


def _derive_record(
    slot: AccessorSlot,
    shape: RecordShape,
    set_whole: Setter,
    *,
    naming: AccessorNamingConfig,
    on_cache_event: CacheEventCallback | None,
) -> Mapping[str, Mutator]:
    # Collisions must surface before the slot is narrowed or rebound.
    check_accessor_names(shape.keys, prefix=naming.prefix)
    cache = slot.record_cache(
        setter=set_whole,
        prefix=naming.prefix,
        on_cache_event=on_cache_event,
    )

    def _reconcile() -> Mapping[str, Mutator]:
        slot.reconciliations += 1
        entries = cache.reconcile(keys=shape.keys, on_cache_event=on_cache_event)
        return bind_fields(entries)

    # A fresh mapping with the same keys must not rebuild the accessors, so
    # the record path tracks the key set rather than the mapping itself.
    return slot.gate.derive(
        identity_inputs=(),
        value_inputs=(set_whole, fingerprint_keys(shape.keys), naming.prefix),
        compute_fn=_reconcile,
        on_cache_event=on_cache_event,
    )
