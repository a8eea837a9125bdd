"""End-to-end PDF output through ReportLab."""

import io

from spellbook.models import ContentRecord, Table
from spellbook.pdf.builder import build_pdf
from spellbook.pdf.pdf_document import layout_document
from spellbook.pdf.pdf_render import render_pages
from spellbook.pdf.pdf_settings import LayoutConfig


def _records():
    return [
        ContentRecord(
            title="Chaos Bolt",
            subtitle="1st-level evocation",
            fields=[("Casting Time", "1 action")],
            body=(
                "You hurl an undulating, warbling mass of chaotic energy.\n"
                "- <b>d8<r> damage\n"
                "- leaps on doubles\n"
                "[table][0]\n"
                "Closing text."
            ),
            tables=[
                Table(
                    title="Damage Type",
                    column_labels=["d8", "Type"],
                    rows=[[str(index), f"type {index}"] for index in range(1, 9)],
                )
            ],
        ),
        ContentRecord(title="Aid", body="Your spell bolsters your allies."),
    ]


def test_build_pdf_writes_file(tmp_path):
    output = tmp_path / "nested" / "book.pdf"
    pages = build_pdf(_records(), output_path=output, title="Spells", show_progress=False)
    assert len(pages) == 3
    data = output.read_bytes()
    assert data.startswith(b"%PDF")


def test_render_to_buffer(config, metrics):
    pages = layout_document(_records(), config=config, metrics=metrics)
    buffer = io.BytesIO()
    render_pages(pages, output=buffer, config=config)
    assert buffer.getvalue().startswith(b"%PDF")


def test_empty_document_still_renders(tmp_path):
    output = tmp_path / "empty.pdf"
    assert build_pdf([], output_path=output, config=LayoutConfig(), show_progress=False) == []
    assert output.read_bytes().startswith(b"%PDF")
