from __future__ import annotations

import csv
import io

import pytest

from models.diff import DiffLine, DiffLineType
from services.diff_engine import ConfigDiffEngine, compute_stats
from services.exporters import DiffExporter


@pytest.fixture
def exporter() -> DiffExporter:
    engine = ConfigDiffEngine()
    engine.set_configs("line1\nline2\nline3\nline4", "line1\nline2-changed\nline4\nline5")
    return DiffExporter(engine.get_line_diff(), engine.get_stats())


def test_export_text(exporter: DiffExporter) -> None:
    text = exporter.export_text().split("\n")

    assert text[0] == "Configuration Diff Report"
    assert text[1] == "=" * 50
    assert "Total lines (Pre): 4" in text
    assert "Modified: 1 lines" in text
    assert "Similarity: 50%" in text
    assert text[-6:] == [
        "  L1: line1",
        "- L2: line2",
        "+ L2: line2-changed",
        "- L3: line3",
        "  L4: line4",
        "+ L4: line5",
    ]


def test_export_text_with_ellipsis() -> None:
    lines = [DiffLine.unchanged(1, 1, "a"), DiffLine.ellipsis(), DiffLine.added(9, "z")]
    text = DiffExporter(lines, compute_stats(lines)).export_text()
    assert text.split("\n")[-3:] == ["  L1: a", "  ...", "+ L9: z"]


def test_export_csv(exporter: DiffExporter) -> None:
    rows = list(csv.reader(io.StringIO(exporter.export_csv())))

    assert rows[0] == ["Change Type", "Pre Line #", "Post Line #", "Content"]
    assert rows[1:] == [
        ["unchanged", "1", "1", "line1"],
        ["modified", "2", "2", "line2-changed"],
        ["removed", "3", "", "line3"],
        ["unchanged", "4", "3", "line4"],
        ["added", "", "4", "line5"],
    ]


def test_export_csv_quotes_content() -> None:
    lines = [DiffLine.added(1, 'name: "a, b"')]
    rows = list(csv.reader(io.StringIO(DiffExporter(lines, compute_stats(lines)).export_csv())))
    assert rows[1] == ["added", "", "1", 'name: "a, b"']


def test_export_markdown(exporter: DiffExporter) -> None:
    markdown = exporter.export_markdown().split("\n")

    assert markdown[0] == "# Configuration Diff Report"
    assert "- **Similarity:** 50%" in markdown
    start = markdown.index("```diff")
    assert markdown[start + 1:] == [
        "  line1",
        "- line2",
        "+ line2-changed",
        "- line3",
        "  line4",
        "+ line5",
        "```",
    ]


def test_export_pdf(exporter: DiffExporter) -> None:
    pdf = exporter.export_pdf()
    assert pdf.startswith(b"%PDF")


def test_pdf_rows_show_both_sides_of_modified_lines(exporter: DiffExporter) -> None:
    assert exporter.pdf_rows() == [
        (DiffLineType.UNCHANGED, "  line1"),
        (DiffLineType.REMOVED, "- line2"),
        (DiffLineType.ADDED, "+ line2-changed"),
        (DiffLineType.REMOVED, "- line3"),
        (DiffLineType.UNCHANGED, "  line4"),
        (DiffLineType.ADDED, "+ line5"),
    ]


def test_export_pdf_truncates_long_diffs() -> None:
    lines = [DiffLine.added(i, f"key{i}: <value & more>" * 10) for i in range(1, 301)]
    exporter = DiffExporter(lines, compute_stats(lines))

    rows = exporter.pdf_rows(max_lines=50)
    assert len(rows) == 51
    assert all(kind == DiffLineType.ADDED for kind, _ in rows[:50])
    assert rows[0][1] == "+ " + lines[0].content[:80] + "..."
    assert rows[-1] == (None, "... and 250 more lines")

    assert exporter.export_pdf(max_lines=50).startswith(b"%PDF")


def test_pdf_rows_without_truncation_have_no_note(exporter: DiffExporter) -> None:
    assert all(kind is not None for kind, _ in exporter.pdf_rows(max_lines=5))


def test_export_dispatch(exporter: DiffExporter) -> None:
    assert exporter.export("text") == exporter.export_text()
    assert exporter.export("csv") == exporter.export_csv()
    assert exporter.export("markdown") == exporter.export_markdown()
    assert isinstance(exporter.export("pdf"), bytes)
    with pytest.raises(ValueError):
        exporter.export("xml")
