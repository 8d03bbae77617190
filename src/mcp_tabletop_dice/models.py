from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias


ModifierMode: TypeAlias = Literal["advantage", "disadvantage"]


@dataclass(frozen=True)
class Die:
    sides: int
    value: int


@dataclass(frozen=True)
class Modifier:
    mode: ModifierMode
    take: int = 1

    @property
    def label(self) -> str:
        return f"{self.mode} {self.take}"


@dataclass(frozen=True)
class ConstantTerm:
    value: int


@dataclass(frozen=True)
class DiceGroupTerm:
    """A parsed, not yet rolled, ``[count]d<sides>[:modifier]`` token."""

    count: int
    sides: int
    modifier: Modifier | None = None


ParsedTerm: TypeAlias = ConstantTerm | DiceGroupTerm


@dataclass(frozen=True)
class DiceGroup:
    dice: tuple[Die, ...]
    modifier: Modifier | None = None

    @property
    def count(self) -> int:
        return len(self.dice)

    @property
    def sides(self) -> int:
        return self.dice[0].sides


Token: TypeAlias = ConstantTerm | DiceGroup


@dataclass(frozen=True)
class ParsedRollRequest:
    input: str
    terms: list[ParsedTerm]

    @property
    def normalized_expression(self) -> str:
        chunks: list[str] = []
        for term in self.terms:
            if isinstance(term, ConstantTerm):
                chunks.append(f"{term.value:+d}")
                continue
            chunk = f"{term.count}d{term.sides}" if term.count != 1 else f"d{term.sides}"
            if term.modifier is not None:
                short = "adv" if term.modifier.mode == "advantage" else "dis"
                chunk += f":{short}" if term.modifier.take == 1 else f":{short}{term.modifier.take}"
            chunks.append(chunk)
        return " ".join(chunks)


@dataclass(frozen=True)
class EvaluatedToken:
    token: Token
    kept: tuple[Die, ...]
    contribution: int


@dataclass(frozen=True)
class RollResult:
    request: ParsedRollRequest
    tokens: list[EvaluatedToken]
    total: int
