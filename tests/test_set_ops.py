from kv_flat import delete_flatten, filter_flatten, merge_flatten


def test_filter_flatten_matches_whole_segments() -> None:
    flat = {"a.b": 1, "x.b": 2}
    assert filter_flatten(flat, "a") == {"a.b": 1}
    assert filter_flatten(flat, "b") == {"a.b": 1, "x.b": 2}


def test_filter_flatten_ignores_substring_matches() -> None:
    assert filter_flatten({"ab.c": 1, "c.a": 2, "a": 3}, "a") == {"c.a": 2, "a": 3}
    assert filter_flatten({"a.b": 1}, "missing") == {}


def test_filter_flatten_custom_delimiter() -> None:
    assert filter_flatten({"a/b": 1, "a.b": 2}, "b", delimiter="/") == {"a/b": 1}


def test_delete_flatten_subtracts_keys() -> None:
    assert delete_flatten({"a": 1, "b": 2}, {"b": 2}) == {"a": 1}
    assert delete_flatten({"a": 1, "b": 2}, {"b": "ignored", "z": 0}) == {"a": 1}
    assert delete_flatten({"a": 1}, {}) == {"a": 1}


def test_merge_flatten_is_right_biased() -> None:
    assert merge_flatten({"a": 1}, {"a": 2, "c": 3}) == {"a": 2, "c": 3}
    assert merge_flatten({"a": 1, "b": 1}, {}) == {"a": 1, "b": 1}


def test_merge_flatten_does_not_recurse() -> None:
    assert merge_flatten({"a": {"x": 1}}, {"a": {"y": 2}}) == {"a": {"y": 2}}


def test_set_operations_do_not_mutate_inputs() -> None:
    current = {"a.b": 1, "c": 2}
    other = {"c": 3, "d": 4}

    _ = filter_flatten(current, "a")
    _ = delete_flatten(current, other)
    merged = merge_flatten(current, other)

    assert current == {"a.b": 1, "c": 2}
    assert other == {"c": 3, "d": 4}
    assert merged is not current
