"""Column extraction from a sheet reader.

Reads the header row, synthesizes missing column names and classifies every
data cell once into a ``Cell``. The resulting ``SheetData`` is the in-memory
representation all engines work on.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from sheetstats.analysis.typing.inference import classify_cell
from sheetstats.core.exceptions import ColumnNotFoundError
from sheetstats.core.logging import get_logger
from sheetstats.core.models.base import EMPTY_CELL, Cell, format_number
from sheetstats.sources.base import RawCell, SheetReader

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColumnData:
    """Classified values of one column.

    ``cells`` maps data row number (>= 2) to its non-empty cell; empty rows are
    gaps in the mapping.
    """

    name: str
    position: int
    cells: Mapping[int, Cell] = field(default_factory=dict)

    def cell(self, row: int) -> Cell:
        return self.cells.get(row, EMPTY_CELL)

    def non_empty(self) -> list[Cell]:
        return list(self.cells.values())

    def numeric_values(self) -> dict[int, float]:
        """Row number -> value for numeric cells."""
        return {
            row: cell.value  # type: ignore[misc]
            for row, cell in self.cells.items()
            if cell.is_number
        }


@dataclass(frozen=True)
class SheetData:
    """Materialized sheet: header plus classified columns."""

    name: str
    row_count: int
    column_count: int
    headers: list[str]
    columns: dict[str, ColumnData]

    @property
    def data_row_count(self) -> int:
        """Rows below the header row."""
        return max(self.row_count - 1, 0)

    def column(self, name: str) -> ColumnData:
        try:
            return self.columns[name]
        except KeyError:
            raise ColumnNotFoundError([name], sheet_name=self.name) from None

    def require(self, *names: str) -> list[ColumnData]:
        """Get several columns, failing on all missing names at once."""
        missing = [n for n in dict.fromkeys(names) if n not in self.columns]
        if missing:
            raise ColumnNotFoundError(missing, sheet_name=self.name)
        return [self.columns[n] for n in names]


def _header_text(raw: RawCell) -> str:
    value = raw.calculated_value if raw.is_formula else raw.value
    if value is None:
        return ""
    if isinstance(value, float | int) and not isinstance(value, bool):
        return format_number(float(value))
    return str(value).strip()


def _synthesized_header(position: int, taken: set[str]) -> str:
    base = f"Column {position}"
    name = base
    suffix = 2
    while name in taken:
        name = f"{base} ({suffix})"
        suffix += 1
    return name


def read_headers(reader: SheetReader) -> list[str]:
    """Read the header row.

    Blank headers become ``Column N`` (1-based position). A header repeating an
    earlier one is renamed the same way. When ``Column N`` is itself taken, a
    ``(2)``, ``(3)``, ... suffix is added so names stay unique.
    """
    headers: list[str] = []
    seen: set[str] = set()
    for position in range(1, reader.highest_column() + 1):
        name = _header_text(reader.cell(position, 1))
        if name in seen:
            logger.warning(
                "duplicate_header_renamed",
                sheet=reader.name,
                header=name,
                position=position,
            )
        if not name or name in seen:
            name = _synthesized_header(position, seen)
        seen.add(name)
        headers.append(name)
    return headers


def read_sheet(
    reader: SheetReader,
    columns: Iterable[str] | None = None,
    date_min_year: int | None = None,
) -> SheetData:
    """Materialize a sheet.

    Args:
        reader: Sheet reader
        columns: Only read these columns (default: all)
        date_min_year: Override for the date-year heuristic

    Returns:
        SheetData with the requested columns in header order

    Raises:
        ColumnNotFoundError: a requested column is not in the header row
    """
    headers = read_headers(reader)
    row_count = reader.highest_row()

    if columns is None:
        selected = list(enumerate(headers, start=1))
    else:
        wanted = list(dict.fromkeys(columns))
        missing = [c for c in wanted if c not in headers]
        if missing:
            raise ColumnNotFoundError(missing, sheet_name=reader.name)
        selected = [(pos, name) for pos, name in enumerate(headers, start=1) if name in wanted]

    extracted: dict[str, ColumnData] = {}
    for position, name in selected:
        cells: dict[int, Cell] = {}
        for row in range(2, row_count + 1):
            cell = classify_cell(reader.cell(position, row), reader.to_datetime, date_min_year)
            if not cell.is_empty:
                cells[row] = cell
        extracted[name] = ColumnData(name=name, position=position, cells=cells)

    logger.debug(
        "sheet_read",
        sheet=reader.name,
        rows=row_count,
        columns=len(extracted),
    )
    return SheetData(
        name=reader.name,
        row_count=row_count,
        column_count=reader.highest_column(),
        headers=headers,
        columns=extracted,
    )


def resolve_column(headers: Iterable[str], aliases: Sequence[str]) -> str | None:
    """Find the first alias present in ``headers``.

    Matching is case-insensitive and ignores surrounding whitespace. Aliases are
    tried in order; the original header spelling is returned.
    """
    by_key: dict[str, str] = {}
    for header in headers:
        by_key.setdefault(header.strip().lower(), header)
    for alias in aliases:
        match = by_key.get(alias.strip().lower())
        if match is not None:
            return match
    return None


def require_column(headers: Iterable[str], aliases: Sequence[str]) -> str:
    """Like ``resolve_column`` but raises when no alias matches."""
    match = resolve_column(headers, aliases)
    if match is None:
        raise ColumnNotFoundError(list(aliases))
    return match
