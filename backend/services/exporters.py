"""
Diff Exporters - Serialize a classified diff into downloadable report formats
"""

from __future__ import annotations

import csv
import io
from xml.sax.saxutils import escape

from models.diff import DiffLine, DiffLineType, DiffStats

RULE = "=" * 50

EXPORT_FORMATS = {
    "text": ("txt", "text/plain"),
    "csv": ("csv", "text/csv"),
    "markdown": ("md", "text/markdown"),
    "pdf": ("pdf", "application/pdf"),
}

_TEXT_PREFIX = {
    DiffLineType.REMOVED: "-",
    DiffLineType.ADDED: "+",
    DiffLineType.UNCHANGED: " ",
}

PDF_CONTENT_WIDTH = 80


def _line_number(value: int | None) -> str:
    return "" if value is None else str(value)


def _clip(content: str, width: int = PDF_CONTENT_WIDTH) -> str:
    return content if len(content) <= width else content[:width] + "..."


class DiffExporter:
    """Render a diff and its statistics as text, CSV, Markdown or PDF"""

    def __init__(self, lines: list[DiffLine], stats: DiffStats):
        self.lines = lines
        self.stats = stats

    def _summary(self) -> list[str]:
        return [
            f"Total lines (Pre): {self.stats.total_lines_pre}",
            f"Total lines (Post): {self.stats.total_lines_post}",
            f"Added: {self.stats.added} lines",
            f"Removed: {self.stats.removed} lines",
            f"Modified: {self.stats.modified} lines",
            f"Unchanged: {self.stats.unchanged} lines",
            f"Similarity: {self.stats.similarity}%",
        ]

    def export_text(self) -> str:
        output = ["Configuration Diff Report", RULE, *self._summary(), RULE, ""]

        for line in self.lines:
            if line.type == DiffLineType.ELLIPSIS:
                output.append(f"  {line.content}")
                continue
            if line.type == DiffLineType.MODIFIED:
                output.append(f"- L{line.pre_line_num}: {line.original_content}")
                output.append(f"+ L{line.post_line_num}: {line.content}")
                continue
            number = line.post_line_num if line.type == DiffLineType.ADDED else line.pre_line_num
            output.append(f"{_TEXT_PREFIX[line.type]} L{number}: {line.content}")

        return "\n".join(output)

    def export_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["Change Type", "Pre Line #", "Post Line #", "Content"])
        for line in self.lines:
            writer.writerow(
                [
                    line.type.value,
                    _line_number(line.pre_line_num),
                    _line_number(line.post_line_num),
                    line.content,
                ]
            )
        return buffer.getvalue()

    def export_markdown(self) -> str:
        output = [
            "# Configuration Diff Report",
            "",
            "## Statistics",
            "",
            f"- **Total lines (Pre):** {self.stats.total_lines_pre}",
            f"- **Total lines (Post):** {self.stats.total_lines_post}",
            f"- **Added:** {self.stats.added} lines",
            f"- **Removed:** {self.stats.removed} lines",
            f"- **Modified:** {self.stats.modified} lines",
            f"- **Unchanged:** {self.stats.unchanged} lines",
            f"- **Similarity:** {self.stats.similarity}%",
            "",
            "## Changes",
            "",
            "```diff",
        ]

        for line in self.lines:
            if line.type == DiffLineType.REMOVED:
                output.append(f"- {line.content}")
            elif line.type == DiffLineType.ADDED:
                output.append(f"+ {line.content}")
            elif line.type == DiffLineType.MODIFIED:
                output.append(f"- {line.original_content}")
                output.append(f"+ {line.content}")
            else:
                output.append(f"  {line.content}")

        output.append("```")
        return "\n".join(output)

    def pdf_rows(self, max_lines: int = 200) -> list[tuple[DiffLineType | None, str]]:
        """(kind, text) rows for the PDF change list.

        At most max_lines diff entries are listed; a modified entry yields a
        removed and an added row. A final row with kind None notes how many
        entries were left out.
        """
        rows: list[tuple[DiffLineType | None, str]] = []
        shown = self.lines[:max_lines]
        for line in shown:
            if line.type == DiffLineType.MODIFIED:
                rows.append((DiffLineType.REMOVED, f"- {_clip(line.original_content or '')}"))
                rows.append((DiffLineType.ADDED, f"+ {_clip(line.content)}"))
            else:
                rows.append((line.type, f"{_TEXT_PREFIX.get(line.type, ' ')} {_clip(line.content)}"))

        hidden = len(self.lines) - len(shown)
        if hidden > 0:
            rows.append((None, f"... and {hidden} more lines"))
        return rows

    def export_pdf(self, max_lines: int = 200) -> bytes:
        """Render a PDF report listing at most max_lines diff entries"""
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import letter
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import inch
        from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=letter, topMargin=0.5*inch, bottomMargin=0.5*inch,
                                leftMargin=0.5*inch, rightMargin=0.5*inch)

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle('DiffTitle', parent=styles['Heading1'], fontSize=18, spaceAfter=12,
                                     textColor=colors.HexColor('#1e40af'))
        section_style = ParagraphStyle('DiffSection', parent=styles['Heading2'], fontSize=13,
                                       spaceBefore=12, spaceAfter=6, textColor=colors.HexColor('#1e40af'))
        default_line_style = ParagraphStyle('Unchanged', parent=styles['Code'], fontSize=8,
                                            textColor=colors.HexColor('#6b7280'))
        line_styles = {
            DiffLineType.REMOVED: ParagraphStyle('Removed', parent=styles['Code'], fontSize=8,
                                                 textColor=colors.HexColor('#dc2626'),
                                                 backColor=colors.HexColor('#fef2f2')),
            DiffLineType.ADDED: ParagraphStyle('Added', parent=styles['Code'], fontSize=8,
                                               textColor=colors.HexColor('#16a34a'),
                                               backColor=colors.HexColor('#f0fdf4')),
        }

        story = [Paragraph("Configuration Diff Report", title_style)]

        stats_table = Table([line.split(": ", 1) for line in self._summary()], colWidths=[2*inch, 2*inch])
        stats_table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#d1d5db')),
            ('BACKGROUND', (0, 0), (0, -1), colors.HexColor('#f3f4f6')),
        ]))
        story.append(stats_table)
        story.append(Paragraph("Changes", section_style))

        for kind, text in self.pdf_rows(max_lines):
            if kind is None:
                story.append(Spacer(1, 0.1*inch))
                story.append(Paragraph(escape(text), styles['Italic']))
            else:
                story.append(Paragraph(escape(text), line_styles.get(kind, default_line_style)))

        doc.build(story)
        return buffer.getvalue()

    def export(self, fmt: str, max_pdf_lines: int = 200) -> str | bytes:
        """Dispatch to the exporter for fmt ("text", "csv", "markdown" or "pdf")"""
        if fmt == "text":
            return self.export_text()
        if fmt == "csv":
            return self.export_csv()
        if fmt == "markdown":
            return self.export_markdown()
        if fmt == "pdf":
            return self.export_pdf(max_pdf_lines)
        raise ValueError(f"Unsupported export format: {fmt}")
