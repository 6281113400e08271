import pytest

from glbpack.packing.layout import aligned_length, pad_json


@pytest.mark.parametrize(
    "value,expected", [(0, 0), (1, 4), (3, 4), (4, 4), (5, 8), (10, 12)]
)
def test_aligned_length_values(value, expected):
    assert aligned_length(value) == expected


def test_aligned_length_properties():
    for n in range(0, 257):
        m = aligned_length(n)
        assert m % 4 == 0
        assert m >= n
        assert m - n < 4


def test_aligned_length_rejects_negative():
    with pytest.raises(ValueError):
        aligned_length(-1)


def test_pad_json_uses_spaces():
    assert pad_json(b"{}") == b"{}  "
    assert pad_json(b'{"a":1}') == b'{"a":1} '
    assert pad_json(b"{ }x") == b"{ }x"
    assert pad_json(b"") == b""
