import zipfile
from xml.sax.saxutils import escape

import pytest

from so_survey_analyzer.errors import ExcelError
from so_survey_analyzer.xlsx import format_cell, read_rows, sheet_names

MAIN = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PKG = "http://schemas.openxmlformats.org/package/2006/relationships"


def _column(col):
    return "ABCDEFGHIJ"[col]


def _write_workbook(path, sheet_xml):
    """Write a workbook whose sheets are given as name -> raw sheetData rows XML."""
    sheets = "".join(
        f'<sheet name="{escape(name)}" sheetId="{i + 1}" r:id="rId{i + 1}"/>'
        for i, name in enumerate(sheet_xml)
    )
    rels = "".join(
        f'<Relationship Id="rId{i + 1}" Type="{REL}/worksheet" Target="worksheets/sheet{i + 1}.xml"/>'
        for i in range(len(sheet_xml))
    )
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(
            "xl/workbook.xml",
            f'<workbook xmlns="{MAIN}" xmlns:r="{REL}"><sheets>{sheets}</sheets></workbook>',
        )
        archive.writestr("xl/_rels/workbook.xml.rels", f'<Relationships xmlns="{PKG}">{rels}</Relationships>')
        for i, rows_xml in enumerate(sheet_xml.values()):
            archive.writestr(
                f"xl/worksheets/sheet{i + 1}.xml",
                f'<worksheet xmlns="{MAIN}"><sheetData>{rows_xml}</sheetData></worksheet>',
            )


def _write_grid(path, sheets):
    """Write sheets given as name -> {(row, col): value} using shared strings."""
    shared = []
    sheet_xml = {}
    for name, cells in sheets.items():
        by_row = {}
        for (row, col), value in sorted(cells.items()):
            ref = f"{_column(col)}{row + 1}"
            if isinstance(value, str):
                shared.append(value)
                xml = f'<c r="{ref}" t="s"><v>{len(shared) - 1}</v></c>'
            else:
                xml = f'<c r="{ref}"><v>{value!r}</v></c>'
            by_row.setdefault(row, []).append(xml)
        sheet_xml[name] = "".join(
            f'<row r="{row + 1}">{"".join(xml)}</row>' for row, xml in sorted(by_row.items())
        )
    _write_workbook(path, sheet_xml)
    items = "".join(f"<si><t>{escape(text)}</t></si>" for text in shared)
    with zipfile.ZipFile(path, "a") as archive:
        archive.writestr("xl/sharedStrings.xml", f'<sst xmlns="{MAIN}">{items}</sst>')


def test_sheet_names_in_order(tmp_path):
    path = tmp_path / "book.xlsx"
    _write_grid(path, {"Survey": {(0, 0): "a"}, "Extra": {(0, 0): "b"}})
    assert sheet_names(path) == ["Survey", "Extra"]


def test_read_rows_round_trip(tmp_path):
    path = tmp_path / "book.xlsx"
    grid = {(0, 0): "Name", (0, 1): "Score", (1, 0): "Ada & Co", (1, 1): 3.5}
    _write_grid(path, {"Survey": grid})
    assert read_rows(path, "Survey") == [["Name", "Score"], ["Ada & Co", 3.5]]


def test_read_rows_pads_missing_cells(tmp_path):
    path = tmp_path / "book.xlsx"
    _write_grid(path, {"S": {(0, 0): "x", (1, 2): 2.0}})
    assert read_rows(path, "S") == [["x", None, None], [None, None, 2.0]]


def test_read_rows_starts_at_first_used_cell(tmp_path):
    path = tmp_path / "book.xlsx"
    _write_grid(path, {"S": {(1, 1): "only"}})
    assert read_rows(path, "S") == [["only"]]


def test_read_rows_other_cell_kinds(tmp_path):
    path = tmp_path / "book.xlsx"
    rows_xml = (
        '<row r="1">'
        '<c r="A1" t="inlineStr"><is><t>hello</t></is></c>'
        '<c r="B1" t="b"><v>1</v></c>'
        '<c r="C1" t="e"><v>#DIV/0!</v></c>'
        '<c r="D1"/>'
        "</row>"
    )
    _write_workbook(path, {"S": rows_xml})
    assert read_rows(path, "S") == [["hello", True, "#DIV/0!"]]


def test_empty_sheet_has_no_rows(tmp_path):
    path = tmp_path / "book.xlsx"
    _write_workbook(path, {"S": ""})
    assert read_rows(path, "S") == []


def test_missing_sheet_raises(tmp_path):
    path = tmp_path / "book.xlsx"
    _write_grid(path, {"S": {(0, 0): "x"}})
    with pytest.raises(ExcelError):
        read_rows(path, "Missing")


def test_missing_file_raises(tmp_path):
    with pytest.raises(ExcelError):
        sheet_names(tmp_path / "non_existent_file.xlsx")


def test_not_a_zip_raises(tmp_path):
    path = tmp_path / "book.xlsx"
    path.write_text("plain text")
    with pytest.raises(ExcelError):
        sheet_names(path)


@pytest.mark.parametrize("number", [0, 7, 123456789])
def test_whole_floats_print_as_integers(number):
    assert format_cell(float(number)) == str(number)


def test_format_cell_values():
    assert format_cell(None) == ""
    assert format_cell("abc") == "abc"
    assert format_cell(1.0) == "1"
    assert format_cell(2.5) == "2.5"
    assert format_cell(True) == "true"
    assert format_cell(1e-05) == "0.00001"