from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from loguru import logger

from .models import (
    ConstantTerm,
    DiceGroup,
    Die,
    EvaluatedToken,
    Modifier,
    ParsedRollRequest,
    ParsedTerm,
    RollResult,
    Token,
)
from .parser import parse_request
from .rendering import render_result


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def roll_die(sides: int, rng: RandomSource) -> Die:
    return Die(sides=sides, value=rng.randint(1, sides))


def roll_term(term: ParsedTerm, rng: RandomSource) -> Token:
    if isinstance(term, ConstantTerm):
        return term
    dice = tuple(roll_die(term.sides, rng) for _ in range(term.count))
    return DiceGroup(dice=dice, modifier=term.modifier)


def select_dice(dice: tuple[Die, ...], modifier: Modifier | None) -> tuple[Die, ...]:
    """Return the dice that count towards the group's value.

    Advantage keeps the ``take`` highest, disadvantage the ``take`` lowest.
    Ties are broken arbitrarily; only values matter.
    """

    if modifier is None:
        return dice

    ordered = sorted(dice, key=lambda d: d.value)
    if modifier.mode == "advantage":
        return tuple(ordered[len(ordered) - modifier.take :])
    return tuple(ordered[: modifier.take])


def evaluate_token(token: Token) -> EvaluatedToken:
    if isinstance(token, ConstantTerm):
        return EvaluatedToken(token=token, kept=(), contribution=token.value)
    kept = select_dice(token.dice, token.modifier)
    return EvaluatedToken(token=token, kept=kept, contribution=sum(d.value for d in kept))


def evaluate(tokens: list[Token]) -> tuple[list[EvaluatedToken], int]:
    evaluated = [evaluate_token(t) for t in tokens]
    return evaluated, sum(t.contribution for t in evaluated)


def roll_request(request: ParsedRollRequest, rng: RandomSource | None = None) -> RollResult:
    rng = rng or secrets.SystemRandom()
    tokens = [roll_term(term, rng) for term in request.terms]
    evaluated, total = evaluate(tokens)
    logger.debug(f"Rolled {request.normalized_expression!r} => {total}")
    return RollResult(request=request, tokens=evaluated, total=total)


def roll_tokens(text: str, rng: RandomSource | None = None) -> list[Token]:
    """Parse ``text`` and roll every dice group. Raises DiceError for invalid input."""

    request = parse_request(text)
    rng = rng or secrets.SystemRandom()
    return [roll_term(term, rng) for term in request.terms]


def _term_to_dict(evaluated: EvaluatedToken) -> dict[str, Any]:
    token = evaluated.token
    if isinstance(token, ConstantTerm):
        return {
            "type": "constant",
            "value": token.value,
            "subtotal": evaluated.contribution,
        }

    data: dict[str, Any] = {
        "type": "dice",
        "count": token.count,
        "sides": token.sides,
        "rolls": [d.value for d in token.dice],
        "kept": [d.value for d in evaluated.kept],
        "subtotal": evaluated.contribution,
    }
    if token.modifier is not None:
        data["modifier"] = {"mode": token.modifier.mode, "take": token.modifier.take}
    return data


def _explain(evaluated: EvaluatedToken) -> str:
    token = evaluated.token
    if isinstance(token, ConstantTerm):
        return f"{token.value:+d}"

    prefix = f"{token.count}d{token.sides}" if token.count != 1 else f"d{token.sides}"
    rolls = [d.value for d in token.dice]
    if token.modifier is None:
        return f"{prefix}: rolls {rolls} => {evaluated.contribution}"
    kept = [d.value for d in evaluated.kept]
    return f"{prefix}({token.modifier.label}): rolls {rolls} -> keep {kept} => {evaluated.contribution}"


def result_to_dict(result: RollResult, rng_source: str) -> dict[str, Any]:
    explanation = "; ".join(_explain(t) for t in result.tokens) + f" => {result.total}"
    return {
        "request_id": uuid.uuid4().hex,
        "timestamp": _now_utc_iso(),
        "input": result.request.input,
        "normalized_expression": result.request.normalized_expression,
        "rng": {"source": rng_source},
        "terms": [_term_to_dict(t) for t in result.tokens],
        "total": result.total,
        "explanation": explanation,
        "table": render_result(result),
    }


def roll_from_text(text: str, rng: RandomSource | None = None) -> dict[str, Any]:
    """Parse, validate, then roll. Raises DiceError for invalid input."""

    rng = rng or secrets.SystemRandom()
    result = roll_request(parse_request(text), rng)
    return result_to_dict(result, rng_source=type(rng).__name__)
