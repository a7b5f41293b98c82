"""Table grid reconstruction.

``span`` expands colspan/rowspan-compressed markup into an explicit grid where
every cell covers one row and one column.  ``pad`` then extends ragged rows
with empty cells so the grid is rectangular.

Both mimic what browsers render for sloppy markup rather than rejecting it:
a colspan that overflows the table on the last cell of a row is clamped, and
rowspans that reach past the last row are dropped.
"""

import logging

from html_tables.errors import InvalidCellSpanError, OverlapSpanError
from html_tables.tables.schema import Cell, Row, Table

logger = logging.getLogger(__name__)


def _count_columns(table: Table) -> int:
    """Widest row, counting cells owed to each row by rowspans from earlier rows."""
    n_rows = len(table.rows)
    widths = [0] * n_rows
    for i, row in enumerate(table.rows):
        widths[i] += len(row.cells)
        for cell in row.cells:
            for offset in range(1, cell.rowspan):
                if i + offset >= n_rows:
                    break
                widths[i + offset] += 1
    return max(widths)


def _unit_copy(cell: Cell) -> Cell:
    """Deep copy of *cell* spanning a single row and column."""
    return cell.model_copy(update={"colspan": 1, "rowspan": 1}, deep=True)


def span(table: Table) -> Table:
    """Return a copy of *table* with every colspan/rowspan expanded into real cells.

    Raises OverlapSpanError when a rowspan from an earlier row lands on a
    column that a colspan in the current row wants, and InvalidCellSpanError
    when a colspan pushes past the table width anywhere but on a row's last cell.
    """
    if not table.rows:
        return table.model_copy(deep=True)

    n_rows = len(table.rows)
    n_cols = _count_columns(table)
    # (row, col) -> cell projected down by a rowspan
    pending: dict[tuple[int, int], Cell] = {}
    rows: list[Row] = []

    for i, row in enumerate(table.rows):
        cells: list[Cell] = []
        j = 0
        last_index = len(row.cells) - 1

        for cell_index, ocell in enumerate(row.cells):
            # Cells from rows above come first
            while (i, j) in pending:
                cells.append(pending.pop((i, j)))
                j += 1

            for k in range(max(ocell.colspan, 1)):
                if (i, j) in pending:
                    raise OverlapSpanError(f"Row {i}, column {j} is covered by both a rowspan and a colspan", value=(i, j))
                cells.append(_unit_copy(ocell))
                for offset in range(1, min(ocell.rowspan, n_rows - i)):
                    pending[(i + offset, j)] = _unit_copy(ocell)
                j += 1

                if j >= n_cols:
                    # Browsers only tolerate the overflow when nothing follows in the row
                    if cell_index != last_index:
                        raise InvalidCellSpanError(
                            f"colspan={ocell.colspan} in row {i} overflows the table width ({n_cols})",
                            value=ocell.colspan,
                        )
                    if k + 1 < ocell.colspan:
                        logger.debug("Clamped colspan=%d in row %d to the table width (%d)", ocell.colspan, i, n_cols)
                    break

        # Remaining cells owed by rows above; gaps before them get empty cells
        owed = sorted(col for row_index, col in pending if row_index == i and col >= j)
        for col in owed:
            cells.extend(Cell() for _ in range(col - j))
            cells.append(pending.pop((i, col)))
            j = col + 1

        rows.append(Row(cells=cells, attrs=dict(row.attrs)))

    return table.model_copy(update={"rows": rows})


def pad(table: Table) -> Table | None:
    """Return a copy of *table* with short rows padded by empty cells, or None if already regular.

    A padding cell is a header when the last real cell of its row is one: short
    rows inside a header block usually stay header rows.
    """
    if not table.rows or table.is_regular():
        return None

    n_cols = max(len(row.cells) for row in table.rows)
    rows: list[Row] = []
    for row in table.rows:
        is_header = row.cells[-1].is_header if row.cells else False
        filler = [Cell(is_header=is_header) for _ in range(n_cols - len(row.cells))]
        rows.append(Row(cells=list(row.cells) + filler, attrs=dict(row.attrs)))

    return table.model_copy(update={"rows": rows})
