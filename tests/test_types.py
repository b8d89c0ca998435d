"""Tests for _types module."""
import pytest

from atomengine._types import compare, product


def test_compare_operators():
    assert compare(5, ">=", 5)
    assert compare(5, "<=", 5)
    assert compare(6, ">", 5)
    assert compare(4, "<", 5)
    assert compare(5, "==", 5)
    assert compare(5, "!=", 4)
    assert not compare(4, ">=", 5)


def test_compare_unknown_operator():
    with pytest.raises(ValueError, match="Unknown operator"):
        compare(1, "=>", 1)


def test_product():
    assert product([2.0, 1.5]) == pytest.approx(3.0)
    assert product([]) == 1.0
    assert product(x for x in [4, 0.5]) == pytest.approx(2.0)
