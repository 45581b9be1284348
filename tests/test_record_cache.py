from __future__ import annotations

import pytest

from destructure.exceptions import UsageError
from destructure.record_cache import (
    RecordAccessorCache,
    accessor_name,
    bind_fields,
    capitalize_identifier,
    check_accessor_names,
)
from destructure.synthesis import SetterRef


def _cache(prefix: str = "set") -> RecordAccessorCache:
    return RecordAccessorCache(setter=SetterRef(current=lambda update: None), prefix=prefix)


def test_accessor_name_capitalizes_only_first_character() -> None:
    assert accessor_name("firstName") == "setFirstName"
    assert accessor_name("x") == "setX"
    assert accessor_name("url", prefix="update") == "updateUrl"
    assert capitalize_identifier("hTTP") == "HTTP"


def test_accessor_name_rejects_empty_identifier() -> None:
    with pytest.raises(UsageError) as excinfo:
        accessor_name("")
    assert excinfo.value.context == {"key": ""}


def test_reconcile_reuses_surviving_and_synthesizes_new_keys(cache_events) -> None:
    cache = _cache()
    first = cache.reconcile(keys=("x",))
    second = cache.reconcile(
        keys=("x", "y"),
        on_cache_event=lambda event, detail: cache_events.append((event, detail)),
    )

    assert second["x"] is first["x"]
    assert set(second) == {"x", "y"}
    assert cache.synthesized == 2
    assert cache_events == [("record:synthesize", "y")]


def test_reconcile_drops_removed_keys(cache_events) -> None:
    cache = _cache()
    first = cache.reconcile(keys=("x", "y"))
    second = cache.reconcile(
        keys=("x",),
        on_cache_event=lambda event, detail: cache_events.append((event, detail)),
    )

    assert second["x"] is first["x"]
    assert "y" not in cache
    assert len(cache) == 1
    assert cache.dropped == 1
    assert cache_events == [("record:drop", "y")]


def test_reappearing_key_gets_fresh_mutator() -> None:
    cache = _cache()
    original = cache.reconcile(keys=("x", "y"))["y"].mutator
    cache.reconcile(keys=("x",))
    returned = cache.reconcile(keys=("x", "y"))["y"].mutator
    assert returned is not original


def test_reconcile_rejects_colliding_accessor_names() -> None:
    cache = _cache()
    with pytest.raises(UsageError) as excinfo:
        cache.reconcile(keys=("foo", "Foo"))
    assert excinfo.value.context["accessor"] == "setFoo"
    assert len(cache) == 0


def test_prefix_change_renames_without_replacing_mutators() -> None:
    cache = _cache()
    before = cache.reconcile(keys=("x",))
    cache.prefix = "update"
    after = cache.reconcile(keys=("x",))

    assert after["x"].accessor_name == "updateX"
    assert after["x"].mutator is before["x"].mutator


def test_bind_fields_is_read_only_and_ordered() -> None:
    cache = _cache()
    fields = bind_fields(cache.reconcile(keys=("b", "a")))

    assert list(fields) == ["setB", "setA"]
    with pytest.raises(TypeError):
        fields["setC"] = lambda update: None  # type: ignore[index]


def test_check_accessor_names_maps_keys_without_touching_a_cache() -> None:
    assert check_accessor_names(("firstName", "age"), prefix="update") == {
        "firstName": "updateFirstName",
        "age": "updateAge",
    }
    with pytest.raises(UsageError) as excinfo:
        check_accessor_names(("foo", "Foo"))
    assert excinfo.value.context["keys"] == ("foo", "Foo")
