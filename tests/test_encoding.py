from __future__ import annotations

import pytest

from omingard import encoding


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1, "A"),
        (2, "2"),
        (10, "10"),
        (11, "J"),
        (12, "Q"),
        (13, "K"),
    ],
)
def test_display_value(value: int, expected: str) -> None:
    assert encoding.display_value(value) == expected


@pytest.mark.parametrize("value", [0, 14])
def test_display_value_rejects_out_of_range(value: int) -> None:
    with pytest.raises(ValueError):
        encoding.display_value(value)


@pytest.mark.parametrize(
    ("suit", "expected"),
    [
        ("hearts", "red"),
        ("diamonds", "red"),
        ("spades", "black"),
        ("clubs", "black"),
    ],
)
def test_colour_mapping(suit: str, expected: str) -> None:
    assert encoding.colour(suit) == expected


def test_parse_code_reads_suit_value_and_deck() -> None:
    parsed = encoding.parse_code("d.12.a")

    assert parsed == encoding.CardCode(suit="diamonds", value=12, deck="a", open=False)


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("s.k.o", encoding.CardCode(suit="spades", value=13, deck="a", open=True)),
        ("H.a.b", encoding.CardCode(suit="hearts", value=1, deck="b", open=False)),
        ("c.10", encoding.CardCode(suit="clubs", value=10, deck="a", open=False)),
        ("d.J", encoding.CardCode(suit="diamonds", value=11, deck="a", open=False)),
    ],
)
def test_parse_code_variants(code: str, expected: encoding.CardCode) -> None:
    assert encoding.parse_code(code) == expected


@pytest.mark.parametrize("code", ["h", "x.1", "h.14", "h.0", "h.1.z", "h.1.a.o", "h.seven"])
def test_parse_code_rejects_malformed(code: str) -> None:
    with pytest.raises(ValueError):
        encoding.parse_code(code)


def test_format_code_and_label() -> None:
    assert encoding.format_code("diamonds", 12, "b") == "d.12.b"
    assert encoding.label("spades", 7, "a") == "♠ 7 (a)"
    assert encoding.label("hearts", 1, "b") == "♥ A (b)"
