from __future__ import annotations

from enum import Enum
from typing import Any


class DiceError(ValueError):
    """User-facing validation errors (fail-fast, no roll performed)."""


class NumberErrorKind(Enum):
    EMPTY = "cannot parse integer from empty string"
    INVALID_DIGIT = "invalid digit found in string"
    POS_OVERFLOW = "number too large to fit in target type"
    NEG_OVERFLOW = "number too small to fit in target type"
    ZERO = "number would be zero for non-zero type"


class TakeErrorKind(Enum):
    PARSE = "parse"
    MORE_THAN_DICE = "more_than_dice"


class ModifierErrorKind(Enum):
    INVALID = "Invalid modifier"
    ADVANTAGE = "Advantage count"
    DISADVANTAGE = "Disadvantage count"


class DieErrorKind(Enum):
    COUNT = "Count"
    SIDES = "Sides"
    MODIFIER = "Modifier"


class TokenErrorKind(Enum):
    INVALID = "Invalid token"
    DIE = "Die"
    CONSTANT = "Constant"


class ParseError(DiceError):
    """A failure at one grammar level.

    ``token`` is the substring being parsed at this level, ``kind`` says what
    went wrong and ``inner`` holds the error from the level below, if any.
    Errors compare by value so a whole chain can be asserted at once.
    """

    def __init__(self, token: str, kind: Enum, inner: DiceError | None = None) -> None:
        super().__init__(token, kind, inner)
        self.token = token
        self.kind = kind
        self.inner = inner

    def describe(self) -> str:
        if self.inner is None:
            return self.kind.value
        return f"{self.kind.value}: {self.inner}"

    def __str__(self) -> str:
        return f"Error parsing `{self.token}`.\n{self.describe()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(token={self.token!r}, kind={self.kind}, inner={self.inner!r})"

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (self.token, self.kind, self.inner) == (other.token, other.kind, other.inner)

    def __hash__(self) -> int:
        return hash((type(self), self.token, self.kind))


class NumberError(ParseError):
    """A digit run that is not a valid nonzero integer of the target width."""

    kind: NumberErrorKind

    def __init__(self, token: str, kind: NumberErrorKind, inner: None = None) -> None:
        super().__init__(token, kind)


class TakeError(DiceError):
    """The ``N`` of ``advN``/``disN`` is unusable.

    Either it did not parse (``inner`` is the NumberError) or it asks for
    more dice than the group rolls.
    """

    def __init__(
        self,
        kind: TakeErrorKind,
        inner: NumberError | None = None,
        take: int | None = None,
        count: int | None = None,
    ) -> None:
        super().__init__(kind, inner, take, count)
        self.kind = kind
        self.inner = inner
        self.take = take
        self.count = count

    @classmethod
    def parse(cls, inner: NumberError) -> TakeError:
        return cls(TakeErrorKind.PARSE, inner)

    @classmethod
    def more_than_dice(cls, take: int, count: int) -> TakeError:
        return cls(TakeErrorKind.MORE_THAN_DICE, take=take, count=count)

    def __str__(self) -> str:
        if self.kind is TakeErrorKind.PARSE:
            return str(self.inner)
        return f"dice to leave ({self.take}) cannot be more than dice thrown ({self.count})"

    def __repr__(self) -> str:
        if self.kind is TakeErrorKind.PARSE:
            return f"TakeError.parse({self.inner!r})"
        return f"TakeError.more_than_dice(take={self.take}, count={self.count})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TakeError):
            return NotImplemented
        return (self.kind, self.inner, self.take, self.count) == (
            other.kind,
            other.inner,
            other.take,
            other.count,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.take, self.count))


class ModifierError(ParseError):
    kind: ModifierErrorKind


class DieError(ParseError):
    kind: DieErrorKind


class TokenError(ParseError):
    kind: TokenErrorKind


class EmptyRequestError(DiceError):
    def __init__(self, message: str = "No tokens to roll. Example: 'd20 +3' or '4d6:dis3'.") -> None:
        super().__init__(message)
