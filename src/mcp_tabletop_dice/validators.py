from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import NumberError, NumberErrorKind


_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class IntBounds:
    """Inclusive range of a fixed-width integer type."""

    name: str
    min: int
    max: int

    @property
    def signed(self) -> bool:
        return self.min < 0

    @property
    def max_digits(self) -> int:
        return len(str(max(self.max, -self.min)))


U8 = IntBounds("u8", 0, 255)
I16 = IntBounds("i16", -32768, 32767)


def parse_nonzero(text: str, bounds: IntBounds) -> int:
    """Parse ``text`` as a nonzero integer that fits in ``bounds``.

    Raises NumberError carrying ``text`` and the reason it was rejected.
    """

    if not text:
        raise NumberError(text, NumberErrorKind.EMPTY)

    digits = text
    negative = False
    if text[0] == "+" or (text[0] == "-" and bounds.signed):
        digits = text[1:]
        negative = text[0] == "-"

    if not _DIGITS_RE.fullmatch(digits):
        raise NumberError(text, NumberErrorKind.INVALID_DIGIT)

    # Bound the digit run before int() so huge inputs report overflow.
    stripped = digits.lstrip("0") or "0"
    if len(stripped) > bounds.max_digits:
        kind = NumberErrorKind.NEG_OVERFLOW if negative else NumberErrorKind.POS_OVERFLOW
        raise NumberError(text, kind)

    value = -int(stripped) if negative else int(stripped)
    if value > bounds.max:
        raise NumberError(text, NumberErrorKind.POS_OVERFLOW)
    if value < bounds.min:
        raise NumberError(text, NumberErrorKind.NEG_OVERFLOW)
    if value == 0:
        raise NumberError(text, NumberErrorKind.ZERO)
    return value


def parse_count(text: str) -> int:
    """Nonzero u8, as used for dice count, die sides and modifier take."""
    return parse_nonzero(text, U8)


def parse_constant(text: str) -> int:
    return parse_nonzero(text, I16)
