"""Field and parameter table extraction.

Tables are located by the segmenter; this module works out which column
holds what and yields the usable rows.
"""

import logging
from collections.abc import Iterator
from typing import NamedTuple

from bs4 import Tag

from .html import element_text

logger = logging.getLogger(__name__)

HEADER_FIELD = "field"
HEADER_PARAMETER = "parameter"
HEADER_TYPE = "type"
HEADER_REQUIRED = "required"
HEADER_DESCRIPTION = "description"

HEADER_SELECTORS = (
    "thead tr th, thead tr td",
    "tbody tr:first-child th, tbody tr:first-child td",
    "tr:first-child th, tr:first-child td",
)


class FieldColumns(NamedTuple):
    name: int
    type: int
    description: int


class TableHeader(NamedTuple):
    columns: dict[str, int]
    row: Tag | None


class ParamColumns(NamedTuple):
    name: int
    type: int
    required: int
    description: int


def parse_table_headers(table: Tag) -> TableHeader:
    """Map lowercased header text to column index, along with the row it came from.

    The map is empty and the row is None when the table has no header row.
    """
    headers: list[Tag] = []
    for selector in HEADER_SELECTORS:
        headers = table.select(selector)
        if headers:
            break
    else:
        logger.warning("No table headers found, using empty header map")

    columns = {element_text(cell).lower(): index for index, cell in enumerate(headers)}
    return TableHeader(columns=columns, row=headers[0].parent if headers else None)


def _column(headers: dict[str, int], *names: str, default: int) -> int:
    for name in names:
        if name in headers:
            return headers[name]
    return default


def field_columns(headers: dict[str, int]) -> FieldColumns:
    return FieldColumns(
        name=_column(headers, HEADER_FIELD, HEADER_PARAMETER, default=0),
        type=_column(headers, HEADER_TYPE, default=1),
        description=_column(headers, HEADER_DESCRIPTION, default=2),
    )


def param_columns(headers: dict[str, int]) -> ParamColumns:
    return ParamColumns(
        name=_column(headers, HEADER_PARAMETER, HEADER_FIELD, default=0),
        type=_column(headers, HEADER_TYPE, default=1),
        required=_column(headers, HEADER_REQUIRED, default=2),
        description=_column(headers, HEADER_DESCRIPTION, default=3),
    )


def iter_rows(
    table: Tag, columns: tuple[int, ...], owner: str, header_row: Tag | None = None
) -> Iterator[list[Tag]]:
    """Yield the data cells of every body row wide enough for ``columns``.

    ``header_row`` is never yielded, even when its cells are ``<td>``.

    Rows that are too short are skipped with a warning naming ``owner``.
    """
    needed = max(columns) + 1
    for row in table.select("tbody tr"):
        if row is header_row:
            continue
        cells = row.find_all("td")
        if not cells:
            # header row kept in <tbody>
            continue
        if len(cells) < needed:
            logger.warning(
                "%s: row has only %d columns, expected at least %d", owner, len(cells), needed
            )
            continue
        yield cells
