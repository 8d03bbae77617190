from __future__ import annotations

import re

from loguru import logger

from .errors import (
    DieError,
    DieErrorKind,
    EmptyRequestError,
    ModifierError,
    ModifierErrorKind,
    NumberError,
    TakeError,
    TokenError,
    TokenErrorKind,
)
from .models import ConstantTerm, DiceGroupTerm, Modifier, ModifierMode, ParsedRollRequest, ParsedTerm
from .validators import parse_constant, parse_count


_CONSTANT_RE = re.compile(r"(?P<number>[+-]?[0-9]+)")
_DICE_RE = re.compile(r"(?P<count>[0-9]*)d(?P<sides>[0-9]+)(?::(?P<modifier>.+))?")
_MODIFIER_RE = re.compile(r"(?P<mode>adv|dis)(?P<take>[0-9]*)")

_MODES: dict[str, ModifierMode] = {"adv": "advantage", "dis": "disadvantage"}

_ERROR_KINDS: dict[ModifierMode, ModifierErrorKind] = {
    "advantage": ModifierErrorKind.ADVANTAGE,
    "disadvantage": ModifierErrorKind.DISADVANTAGE,
}


def tokenize(text: str) -> list[str]:
    return text.split()


def parse_modifier(text: str) -> Modifier:
    """Parse the part after ``:`` in a dice group, e.g. ``adv`` or ``dis3``.

    ``take`` defaults to 1. Checking ``take`` against the number of dice is
    left to the caller, which knows the count.
    """

    m = _MODIFIER_RE.fullmatch(text)
    if not m:
        raise ModifierError(text, ModifierErrorKind.INVALID)

    mode = _MODES[m.group("mode")]
    try:
        take = parse_count(m.group("take") or "1")
    except NumberError as e:
        raise ModifierError(text, _ERROR_KINDS[mode], TakeError.parse(e)) from e
    return Modifier(mode=mode, take=take)


def _parse_dice_group(count_str: str, sides_str: str, modifier_str: str | None) -> DiceGroupTerm:
    count_str = count_str or "1"
    try:
        count = parse_count(count_str)
    except NumberError as e:
        raise DieError(count_str, DieErrorKind.COUNT, e) from e

    try:
        sides = parse_count(sides_str)
    except NumberError as e:
        raise DieError(sides_str, DieErrorKind.SIDES, e) from e

    modifier: Modifier | None = None
    if modifier_str is not None:
        try:
            modifier = parse_modifier(modifier_str)
        except ModifierError as e:
            raise DieError(modifier_str, DieErrorKind.MODIFIER, e) from e

        if modifier.take > count:
            inner = ModifierError(
                modifier_str,
                _ERROR_KINDS[modifier.mode],
                TakeError.more_than_dice(take=modifier.take, count=count),
            )
            raise DieError(modifier_str, DieErrorKind.MODIFIER, inner)

    return DiceGroupTerm(count=count, sides=sides, modifier=modifier)


def parse_term(text: str) -> ParsedTerm:
    """Parse one whitespace-free token into a constant or an unrolled dice group."""

    m = _CONSTANT_RE.fullmatch(text)
    if m:
        try:
            return ConstantTerm(value=parse_constant(m.group("number")))
        except NumberError as e:
            raise TokenError(text, TokenErrorKind.CONSTANT, e) from e

    m = _DICE_RE.fullmatch(text)
    if m:
        try:
            return _parse_dice_group(m.group("count"), m.group("sides"), m.group("modifier"))
        except DieError as e:
            raise TokenError(text, TokenErrorKind.DIE, e) from e

    raise TokenError(text, TokenErrorKind.INVALID)


def parse_request(text: str) -> ParsedRollRequest:
    """Parse every token of ``text``; the first bad token aborts the whole request."""

    tokens = tokenize(text)
    if not tokens:
        raise EmptyRequestError()

    terms: list[ParsedTerm] = []
    for tok in tokens:
        try:
            terms.append(parse_term(tok))
        except TokenError as e:
            logger.debug(f"Rejected token {tok!r}: {e.describe()}")
            raise

    return ParsedRollRequest(input=text, terms=terms)
