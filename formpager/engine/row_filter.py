"""Blank-row elision for table data.

Rows are filtered once, before any height is computed, so the simulation
pass and the rendering pass see exactly the same rows.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence, Tuple

from ..exceptions import RowFilterError

logger = logging.getLogger(__name__)

Row = Sequence[Any]
BlankPredicate = Callable[[Row], bool]


def _cell_is_blank(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, str):
        return not cell.strip()
    has_data = getattr(cell, "has_data", None)
    if callable(has_data):
        return not has_data()
    return False


def default_is_blank(row: Row) -> bool:
    """A row is blank when none of its cells carries data.

    Text cells are blank when empty or whitespace; nested blocks are blank
    when they report no data (for example a checkbox group with nothing
    checked).
    """
    return all(_cell_is_blank(cell) for cell in row)


def filter_rows(rows: Iterable[Row], is_blank: BlankPredicate = default_is_blank) -> Tuple[Row, ...]:
    """
    Removes blank rows.

    The predicate is evaluated twice per row; a predicate that answers
    differently for the same row would make the page count unstable, so that
    is reported as a contract violation.

    Args:
        rows: Table rows (sequences of cells)
        is_blank: Predicate deciding whether a row is elided

    Returns:
        Tuple of the rows that are kept, in their original order
    """
    kept = []
    dropped = 0
    for index, row in enumerate(rows):
        first = bool(is_blank(row))
        second = bool(is_blank(row))
        if first != second:
            raise RowFilterError(
                f"Blank-row predicate is not deterministic for row {index}",
                details=f"answered {first} then {second}",
            )
        if first:
            dropped += 1
            continue
        kept.append(tuple(row))

    if dropped:
        logger.debug(f"Row filter elided {dropped} blank row(s), {len(kept)} kept")
    return tuple(kept)
