from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from .models import ConstantTerm, RollResult


class Alignment(Enum):
    LEFT = "<"
    CENTER = "^"
    RIGHT = ">"

    def align(self, text: str, width: int) -> str:
        return f"{text:{self.value}{width}}"


@dataclass(frozen=True)
class Columns:
    cells: list[tuple[str, Alignment]]


@dataclass(frozen=True)
class FullWidth:
    text: str
    alignment: Alignment = Alignment.LEFT


@dataclass(frozen=True)
class Separator:
    char: str = "-"


TableRow: TypeAlias = Columns | FullWidth | Separator


@dataclass
class Table:
    """Plain-text table.

    Column widths are the widest cell in each column. Full-width rows and
    separators span the whole table, which is at least as wide as the
    columns plus one space between each.
    """

    rows: list[TableRow] = field(default_factory=list)

    def append_row(self, row: TableRow) -> None:
        self.rows.append(row)

    def append_rows(self, rows: list[TableRow]) -> None:
        self.rows.extend(rows)

    def append_table(self, other: Table) -> None:
        self.append_rows(other.rows)

    def _column_widths(self) -> list[int]:
        widths: list[int] = []
        for row in self.rows:
            if not isinstance(row, Columns):
                continue
            for i, (text, _alignment) in enumerate(row.cells):
                if i < len(widths):
                    widths[i] = max(widths[i], len(text))
                else:
                    widths.append(len(text))
        return widths

    def render(self) -> str:
        widths = self._column_widths()
        full_width = max((len(r.text) for r in self.rows if isinstance(r, FullWidth)), default=0)
        total_width = max(sum(widths) + max(len(widths) - 1, 0), full_width)

        lines: list[str] = []
        for row in self.rows:
            if isinstance(row, Columns):
                line = " ".join(alignment.align(text, widths[i]) for i, (text, alignment) in enumerate(row.cells))
            elif isinstance(row, FullWidth):
                line = row.alignment.align(row.text, total_width)
            else:
                line = row.char * total_width
            lines.append(line.rstrip())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


def build_table(result: RollResult) -> Table:
    table = Table()
    for evaluated in result.tokens:
        token = evaluated.token
        if isinstance(token, ConstantTerm):
            table.append_row(Columns([(f"{token.value:+d}", Alignment.RIGHT)]))
            continue

        for die in token.dice:
            table.append_row(Columns([(str(die.value), Alignment.RIGHT), (f"(d{die.sides})", Alignment.LEFT)]))
        if token.modifier is not None:
            table.append_row(FullWidth(f"{token.modifier.label} => {evaluated.contribution}"))

    table.append_row(Separator("-"))
    table.append_row(Columns([(str(result.total), Alignment.RIGHT)]))
    return table


def render_result(result: RollResult) -> str:
    return build_table(result).render()
