from __future__ import annotations

import pytest

from destructure.gate import RecomputationGate


def test_gate_reuses_value_while_inputs_are_unchanged(cache_events) -> None:
    gate: RecomputationGate[list[int]] = RecomputationGate()
    composite = [1, 2]
    calls = {"count": 0}

    def _compute() -> list[int]:
        calls["count"] += 1
        return [calls["count"]]

    first = gate.derive(
        identity_inputs=(composite,),
        value_inputs=("setter",),
        compute_fn=_compute,
        on_cache_event=lambda event, detail: cache_events.append((event, detail)),
    )
    second = gate.derive(
        identity_inputs=(composite,),
        value_inputs=("setter",),
        compute_fn=_compute,
        on_cache_event=lambda event, detail: cache_events.append((event, detail)),
    )

    assert second is first
    assert calls["count"] == 1
    assert (gate.hits, gate.misses) == (1, 1)
    assert [event for event, _ in cache_events] == ["gate:miss", "gate:hit"]


def test_gate_compares_identity_inputs_by_reference() -> None:
    gate: RecomputationGate[object] = RecomputationGate()
    gate.derive(identity_inputs=([1],), value_inputs=(), compute_fn=object)
    gate.derive(identity_inputs=([1],), value_inputs=(), compute_fn=object)
    assert gate.misses == 2


def test_gate_compares_value_inputs_by_equality() -> None:
    gate: RecomputationGate[object] = RecomputationGate()
    first = gate.derive(identity_inputs=(), value_inputs=(12345678901,), compute_fn=object)
    second = gate.derive(identity_inputs=(), value_inputs=(12345678901,), compute_fn=object)
    third = gate.derive(identity_inputs=(), value_inputs=(7,), compute_fn=object)
    assert second is first
    assert third is not first


def test_gate_treats_equal_bound_methods_as_unchanged() -> None:
    class Owner:
        def set_state(self, update: object) -> None:
            pass

    owner = Owner()
    gate: RecomputationGate[object] = RecomputationGate()
    first = gate.derive(identity_inputs=(), value_inputs=(owner.set_state,), compute_fn=object)
    second = gate.derive(identity_inputs=(), value_inputs=(owner.set_state,), compute_fn=object)
    assert second is first


def test_gate_keeps_state_when_compute_fails_and_clears() -> None:
    gate: RecomputationGate[object] = RecomputationGate()
    value = gate.derive(identity_inputs=(), value_inputs=(1,), compute_fn=object)

    def _boom() -> object:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        gate.derive(identity_inputs=(), value_inputs=(2,), compute_fn=_boom)
    assert gate.derive(identity_inputs=(), value_inputs=(1,), compute_fn=object) is value

    gate.clear()
    assert gate.derive(identity_inputs=(), value_inputs=(1,), compute_fn=object) is not value
