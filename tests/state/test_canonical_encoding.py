# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.state.canonical import domain_prefix, encode_canonical


def test_encoding_is_key_order_independent() -> None:
    assert encode_canonical({"b": 1, "a": [2, "x"]}) == encode_canonical({"a": [2, "x"], "b": 1})
    assert encode_canonical({"b": 1, "a": 2}) == b'{"a":2,"b":1}'


@pytest.mark.parametrize("value", [1.5, {"x": [0.0]}, {1: 2}, "\ud800"])
def test_encoding_rejects_values_without_one_form(value: object) -> None:
    with pytest.raises(TypeError):
        encode_canonical(value)


def test_domain_prefix_layout() -> None:
    assert domain_prefix("pair_snapshot", version=3) == b"pairswap:pair_snapshot:v3\x00"
    with pytest.raises(ValueError):
        domain_prefix("a:b")
    with pytest.raises(ValueError):
        domain_prefix("x", version=0)
