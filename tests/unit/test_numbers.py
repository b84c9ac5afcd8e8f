import pytest

from vhr.utils.numbers import parse_leading_float


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.5abc", 12.5),
        ("  3", 3.0),
        (".5h", 0.5),
        ("-2", -2.0),
        (7, 7.0),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_leading_float(raw, expected):
    assert parse_leading_float(raw) == expected
