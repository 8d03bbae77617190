import pytest

from mcp_tabletop_dice.errors import NumberError, NumberErrorKind
from mcp_tabletop_dice.validators import I16, U8, parse_constant, parse_count, parse_nonzero


@pytest.mark.parametrize(
    ("text", "value"),
    [("1", 1), ("255", 255), ("+7", 7), ("007", 7)],
)
def test_parse_count_accepts(text, value):
    assert parse_count(text) == value


@pytest.mark.parametrize(
    ("text", "value"),
    [("1", 1), ("-1", -1), ("+12", 12), ("32767", 32767), ("-32768", -32768)],
)
def test_parse_constant_accepts(text, value):
    assert parse_constant(text) == value


@pytest.mark.parametrize(
    ("text", "bounds", "kind"),
    [
        ("", U8, NumberErrorKind.EMPTY),
        ("", I16, NumberErrorKind.EMPTY),
        ("a", U8, NumberErrorKind.INVALID_DIGIT),
        ("1a", I16, NumberErrorKind.INVALID_DIGIT),
        ("+", U8, NumberErrorKind.INVALID_DIGIT),
        ("-", I16, NumberErrorKind.INVALID_DIGIT),
        ("-1", U8, NumberErrorKind.INVALID_DIGIT),
        ("٣", U8, NumberErrorKind.INVALID_DIGIT),
        ("256", U8, NumberErrorKind.POS_OVERFLOW),
        ("1000", U8, NumberErrorKind.POS_OVERFLOW),
        ("32768", I16, NumberErrorKind.POS_OVERFLOW),
        ("-32769", I16, NumberErrorKind.NEG_OVERFLOW),
        ("0", U8, NumberErrorKind.ZERO),
        ("000", U8, NumberErrorKind.ZERO),
        ("-0", I16, NumberErrorKind.ZERO),
    ],
)
def test_parse_nonzero_rejections(text, bounds, kind):
    with pytest.raises(NumberError) as exc:
        parse_nonzero(text, bounds)
    assert exc.value == NumberError(text, kind)
    assert exc.value.token == text


@pytest.mark.parametrize(
    ("text", "bounds", "kind"),
    [
        ("9" * 5000, I16, NumberErrorKind.POS_OVERFLOW),
        ("+" + "9" * 5000, I16, NumberErrorKind.POS_OVERFLOW),
        ("-" + "9" * 5000, I16, NumberErrorKind.NEG_OVERFLOW),
        ("9" * 5000, U8, NumberErrorKind.POS_OVERFLOW),
        ("1" + "0" * 5000, U8, NumberErrorKind.POS_OVERFLOW),
        ("0" * 5000, U8, NumberErrorKind.ZERO),
    ],
)
def test_parse_nonzero_long_digit_runs(text, bounds, kind):
    with pytest.raises(NumberError) as exc:
        parse_nonzero(text, bounds)
    assert exc.value == NumberError(text, kind)


@pytest.mark.parametrize(
    ("text", "bounds", "value"),
    [
        ("0" * 5000 + "7", I16, 7),
        ("-" + "0" * 5000 + "32768", I16, -32768),
        ("0" * 5000 + "255", U8, 255),
    ],
)
def test_parse_nonzero_accepts_zero_padding(text, bounds, value):
    assert parse_nonzero(text, bounds) == value
