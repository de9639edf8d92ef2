import pytest

from top_movers.utils.validators import DEFAULT_LIMIT, is_valid_symbol, resolve_limit


@pytest.mark.parametrize(
    "requested, expected",
    [
        (0, 1),
        (999, 20),
        ("abc", DEFAULT_LIMIT),
        (7, 7),
        ("7", 7),
        ("12px", 12),
        (-3, 1),
        (None, DEFAULT_LIMIT),
        ("", DEFAULT_LIMIT),
        (True, DEFAULT_LIMIT),
        (float("nan"), DEFAULT_LIMIT),
        (4.9, 4),
    ],
)
def test_resolve_limit(requested, expected):
    assert resolve_limit(requested) == expected


def test_resolve_limit_without_argument():
    assert resolve_limit() == 10


def test_symbol_validity():
    assert is_valid_symbol("AAPL")
    assert not is_valid_symbol("N/A")
    assert not is_valid_symbol("")
    assert not is_valid_symbol(None)
