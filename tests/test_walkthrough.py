import io
import zipfile
from xml.sax.saxutils import escape

from so_survey_analyzer.analyzer import SurveyAnalyzer
from so_survey_analyzer.survey import Survey
from so_survey_analyzer.walkthrough import main, run

ROWS = [
    ["Remote work?", "Employment status", "Language you use"],
    ["Remote", "full-time", "Rust"],
    ["Hybrid", "part-time", "Go"],
    ["Remote", "part-time", "Rust"],
    ["In-person", "full-time", "Python"],
]


def _cell(ref, value):
    return f'<c r="{ref}" t="inlineStr"><is><t>{escape(value)}</t></is></c>'


def _write_xlsx(path, rows):
    sheet_rows = "".join(
        f'<row r="{r + 1}">'
        + "".join(_cell(f"{chr(ord('A') + c)}{r + 1}", value) for c, value in enumerate(row))
        + "</row>"
        for r, row in enumerate(rows)
    )
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(
            "xl/workbook.xml",
            '<workbook xmlns:r="urn:example:relationships"><sheets>'
            '<sheet name="Survey" sheetId="1" r:id="rId1"/></sheets></workbook>',
        )
        archive.writestr(
            "xl/_rels/workbook.xml.rels",
            '<Relationships><Relationship Id="rId1" Target="worksheets/sheet1.xml"/>'
            "</Relationships>",
        )
        archive.writestr(
            "xl/worksheets/sheet1.xml",
            f"<worksheet><sheetData>{sheet_rows}</sheetData></worksheet>",
        )
    return path


def _analyzer(rows=ROWS):
    return SurveyAnalyzer(Survey.from_rows(rows))


def _run(analyzer):
    out = io.StringIO()
    run(analyzer, out)
    return out.getvalue()


def test_sections_in_order():
    out = _run(_analyzer())
    headings = [
        "1. Searching for language-related questions:",
        "2. Analyzing remote work patterns:",
        "3. Creating respondent subsets:",
        "4. Survey structure overview:",
        "✓ Analysis complete!",
    ]
    positions = [out.index(heading) for heading in headings]
    assert positions == sorted(positions)


def test_loaded_summary():
    analyzer = _analyzer()
    out = _run(analyzer)
    expected = (
        f"✓ Loaded {len(analyzer.get_survey_structure())} questions with "
        f"{analyzer.survey.respondent_count} respondents"
    )
    assert expected in out


def test_language_search():
    out = _run(_analyzer())
    assert "   • Question 2: Language you use" in out


def test_remote_distribution():
    analyzer = _analyzer()
    out = _run(analyzer)
    distribution = analyzer.get_distribution(0)
    option, count, percentage = distribution.most_popular()
    assert option == "Remote"
    assert "   Question: Remote work?" in out
    assert f"   Most popular: {option} ({count} responses, {percentage:.1f}%)" in out
    shares = distribution.above_threshold(20.0)
    assert shares
    for name, share_count, share in shares:
        assert f"     - {name}: {share_count} ({share:.1f}%)" in out


def test_subsets_and_intersection():
    analyzer = _analyzer()
    out = _run(analyzer)
    remote = analyzer.create_subset(0, "Remote")
    fulltime = analyzer.create_subset(1, "full-time")
    assert (
        f"   Remote workers: {remote.size()} respondents ({remote.percentage():.1f}% of total)"
        in out
    )
    assert f"   Remote full-time workers: {len(remote.intersect(fulltime))} respondents" in out


def test_structure_overview_types():
    out = _run(_analyzer())
    assert "   • Q0: Remote work?... (Type: SingleChoice)" in out
    assert "   First 5 questions:" in out


def test_structure_overview_truncates_long_text():
    long_text = "What is your opinion about the tools used in your team at work today?"
    out = _run(_analyzer([[long_text], ["fine"]]))
    assert f"   • Q0: {long_text[:50]}... " in out
    assert long_text not in out


def test_distribution_error_reported():
    rows = [["Remote work, other thoughts"], ["Remote"]]
    out = _run(_analyzer(rows))
    assert "   Error analyzing distribution: Invalid question type for operation" in out


def test_no_remote_question():
    out = _run(_analyzer([["What is your role?"], ["Dev"]]))
    assert "Most popular" not in out
    assert "Remote workers" not in out
    assert "✓ Analysis complete!" in out


def test_no_employment_question_skips_intersection():
    rows = [["Remote work?"], ["Remote"], ["Hybrid"]]
    out = _run(_analyzer(rows))
    assert "   Remote workers:" in out
    assert "Remote full-time workers" not in out


def test_main_with_workbook(tmp_path, capsys):
    path = _write_xlsx(tmp_path / "survey.xlsx", ROWS)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Stack Overflow Survey Analyzer - Basic Usage Example")
    assert "Loading survey data..." in out
    assert "✓ Analysis complete!" in out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.xlsx")]) == 1
    assert "Excel parsing error" in capsys.readouterr().err