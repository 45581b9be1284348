"""Synthesis of per-element and per-field accessors.

Every accessor produced here is a thin closure over a call-site's
``SetterRef`` and a bound position or key. Invoking an accessor never reads
or writes the composite directly: it hands a transform of the previous whole
container to the current whole-container setter, and the transform reads the
container the host passes it at application time. Several accessor calls
queued before the host commits therefore compose in invocation order.

An update whose result equals the old value (``is`` or ``==``) leaves the
container unchanged. Element types whose ``==`` does not return a plain bool,
such as numpy arrays, make that comparison raise.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from destructure.accessor_contract import Mutator, Remover, Setter, Update


def _unbound_setter(update: Update) -> None:
    raise RuntimeError("accessor invoked before its call-site received a setter")


@dataclass(eq=False)
class SetterRef:
    """Mutable cell holding a call-site's latest whole-container setter."""

    current: Setter = field(default=_unbound_setter)

    def bind(self, setter: Setter) -> None:
        self.current = setter

    def __call__(self, update: Update) -> None:
        self.current(update)


def resolve_update(update: Update, old_value: object) -> object:
    if callable(update):
        return update(old_value)
    return update


def is_unchanged(candidate: object, old_value: object) -> bool:
    return candidate is old_value or bool(candidate == old_value)


def rebuild_sequence(template: Sequence[object], items: list[object]) -> Sequence[object]:
    match template:
        case tuple() if hasattr(template, "_make"):
            return template._make(items)  # type: ignore[attr-defined]
        case tuple():
            return tuple(items)
        case _:
            return items


def replace_at_position(
    sequence: Sequence[object],
    position: int,
    value: object,
) -> Sequence[object]:
    items = list(sequence)
    items[position] = value
    return rebuild_sequence(sequence, items)


def exclude_position(sequence: Sequence[object], position: int) -> Sequence[object]:
    return rebuild_sequence(
        sequence,
        [item for index, item in enumerate(sequence) if index != position],
    )


def replace_field(record: Mapping[str, object], key: str, value: object) -> Mapping[str, object]:
    if isinstance(record, dict):
        updated = copy.copy(record)
    else:
        updated = dict(record)
    updated[key] = value
    return updated


def synthesize_element_mutator(setter: SetterRef, position: int) -> Mutator:
    def _set_element(update: Update) -> None:
        def _transform(sequence: Sequence[object]) -> Sequence[object]:
            if position >= len(sequence):
                return sequence
            old_value = sequence[position]
            candidate = resolve_update(update, old_value)
            if is_unchanged(candidate, old_value):
                return sequence
            return replace_at_position(sequence, position, candidate)

        setter(_transform)

    _set_element.__qualname__ = f"set_element[{position}]"
    return _set_element


def synthesize_remover(setter: SetterRef, position: int) -> Remover:
    def _remove_element() -> None:
        def _transform(sequence: Sequence[object]) -> Sequence[object]:
            if position >= len(sequence):
                return sequence
            return exclude_position(sequence, position)

        setter(_transform)

    _remove_element.__qualname__ = f"remove_element[{position}]"
    return _remove_element


def synthesize_field_mutator(setter: SetterRef, key: str) -> Mutator:
    def _set_field(update: Update) -> None:
        def _transform(record: Mapping[str, object]) -> Mapping[str, object]:
            if key not in record:
                return record
            old_value = record[key]
            candidate = resolve_update(update, old_value)
            if is_unchanged(candidate, old_value):
                return record
            return replace_field(record, key, candidate)

        setter(_transform)

    _set_field.__qualname__ = f"set_field[{key!r}]"
    return _set_field
