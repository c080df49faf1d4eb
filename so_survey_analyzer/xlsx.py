"""Minimal reader for the cell values of .xlsx workbooks."""

from __future__ import annotations

import math
import posixpath
import zipfile
from decimal import Decimal
from xml.etree import ElementTree

from .errors import ExcelError

CellValue = str | float | bool | None

_WORKBOOK = "xl/workbook.xml"
_WORKBOOK_RELS = "xl/_rels/workbook.xml.rels"
_SHARED_STRINGS = "xl/sharedStrings.xml"


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _open(path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ExcelError(exc) from exc


def _read_xml(archive: zipfile.ZipFile, name: str) -> ElementTree.Element:
    try:
        with archive.open(name) as stream:
            return ElementTree.parse(stream).getroot()
    except KeyError as exc:
        raise ExcelError(f"missing part {name}") from exc
    except (ElementTree.ParseError, OSError, zipfile.BadZipFile) as exc:
        raise ExcelError(exc) from exc


def _workbook_sheets(archive: zipfile.ZipFile) -> list[tuple[str, str]]:
    workbook = _read_xml(archive, _WORKBOOK)
    rels = _read_xml(archive, _WORKBOOK_RELS)
    targets = {
        rel.get("Id"): rel.get("Target", "")
        for rel in rels
        if _local(rel.tag) == "Relationship"
    }
    sheets = []
    for element in workbook.iter():
        if _local(element.tag) != "sheet":
            continue
        rel_id = next(
            (value for key, value in element.attrib.items() if key.startswith("{") and _local(key) == "id"),
            None,
        )
        target = targets.get(rel_id)
        if target is None:
            raise ExcelError(f"no relationship for sheet {element.get('name')!r}")
        if target.startswith("/"):
            part = target.lstrip("/")
        else:
            part = posixpath.normpath(posixpath.join("xl", target))
        sheets.append((element.get("name", ""), part))
    return sheets


def _text_of(element: ElementTree.Element) -> str:
    """Concatenate the text runs of a string item, ignoring phonetic hints."""
    pieces = []
    for child in element:
        name = _local(child.tag)
        if name == "t":
            pieces.append(child.text or "")
        elif name == "r":
            pieces.extend(t.text or "" for t in child if _local(t.tag) == "t")
    return "".join(pieces)


def _shared_strings(archive: zipfile.ZipFile) -> list[str]:
    if _SHARED_STRINGS not in archive.namelist():
        return []
    root = _read_xml(archive, _SHARED_STRINGS)
    return [_text_of(item) for item in root if _local(item.tag) == "si"]


def _split_reference(reference: str) -> tuple[int, int]:
    letters = reference.rstrip("0123456789")
    digits = reference[len(letters):]
    if not letters or not digits:
        raise ExcelError(f"invalid cell reference {reference!r}")
    column = 0
    for letter in letters.upper():
        column = column * 26 + (ord(letter) - ord("A") + 1)
    return int(digits) - 1, column - 1


def _cell_value(cell: ElementTree.Element, shared: list[str]) -> CellValue:
    kind = cell.get("t", "n")
    children = {_local(child.tag): child for child in cell}
    if kind == "inlineStr":
        inline = children.get("is")
        return _text_of(inline) if inline is not None else None
    raw_element = children.get("v")
    if raw_element is None:
        return None
    raw = raw_element.text or ""
    if kind == "s":
        try:
            return shared[int(raw)]
        except (ValueError, IndexError) as exc:
            raise ExcelError(f"bad shared string index {raw!r}") from exc
    if kind == "b":
        return raw.strip() != "0"
    if kind in ("str", "e", "d"):
        return raw
    try:
        return float(raw)
    except ValueError as exc:
        raise ExcelError(f"bad numeric value {raw!r}") from exc


def sheet_names(path) -> list[str]:
    """Names of the worksheets of a workbook, in workbook order."""
    with _open(path) as archive:
        return [name for name, _ in _workbook_sheets(archive)]


def read_rows(path, sheet: str) -> list[list[CellValue]]:
    """Rows of the used range of a worksheet.

    The range spans from the first to the last cell holding a value; every
    row has the same width and missing cells are ``None``.
    """
    with _open(path) as archive:
        parts = dict(_workbook_sheets(archive))
        if sheet not in parts:
            raise ExcelError(f"worksheet not found: {sheet}")
        root = _read_xml(archive, parts[sheet])
        shared = _shared_strings(archive)

    cells: dict[tuple[int, int], CellValue] = {}
    next_row = 0
    for row in root.iter():
        if _local(row.tag) != "row":
            continue
        row_number = row.get("r")
        row_idx = int(row_number) - 1 if row_number else next_row
        next_row = row_idx + 1
        next_col = 0
        for cell in row:
            if _local(cell.tag) != "c":
                continue
            reference = cell.get("r")
            col_idx = _split_reference(reference)[1] if reference else next_col
            next_col = col_idx + 1
            value = _cell_value(cell, shared)
            if value is not None:
                cells[(row_idx, col_idx)] = value

    if not cells:
        return []
    rows = [r for r, _ in cells]
    cols = [c for _, c in cells]
    first_row, last_row = min(rows), max(rows)
    first_col, last_col = min(cols), max(cols)
    return [
        [cells.get((r, c)) for c in range(first_col, last_col + 1)]
        for r in range(first_row, last_row + 1)
    ]


def format_cell(value: object) -> str:
    """Render a cell value as text; whole numbers lose their fraction."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value.is_integer():
            text = str(int(value))
            if value == 0 and math.copysign(1.0, value) < 0:
                return "-" + text
            return text
        return format(Decimal(repr(value)), "f")
    return str(value)