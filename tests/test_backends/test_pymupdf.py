"""Tests for the PyMuPDF source and sink against generated PDFs."""

import fitz
import pytest

from pdfreflow.core.errors import ExtractionError, RegenerationError
from pdfreflow.core.geometry import Box
from pdfreflow.layout.textmap import replace_text_in_block, settle
from pdfreflow.pipeline.edits import EditRequest
from pdfreflow.pipeline.extract import extract_text_map
from pdfreflow.pipeline.session import EditSession
from pdfreflow.sinks.pymupdf import PyMuPDFSink
from pdfreflow.sources.pymupdf import PyMuPDFSource

PAGE_HEIGHT = 842


def _make_pdf(pages):
    """Build a PDF; ``pages`` is a list of [(x, baseline_y, text), ...] per page."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page(width=595, height=PAGE_HEIGHT)
        for x, y, text in lines:
            page.insert_text((x, y), text, fontname="helv", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


def _texts(data):
    return [block.text for block in extract_text_map(data).blocks]


@pytest.fixture
def cv_pdf():
    return _make_pdf([
        [(72, 100, "Jane Doe"), (72, 160, "Python developer")],
        [(72, 100, "References available")],
    ])


def test_source_reads_spans_with_bottom_left_origin(cv_pdf):
    with PyMuPDFSource().open(cv_pdf) as handle:
        assert handle.num_pages == 2
        page = handle.get_page(1)
        with pytest.raises(IndexError):
            handle.get_page(3)

    assert (page.width, page.height) == (595, PAGE_HEIGHT)
    assert [item.text for item in page.items] == ["Jane Doe", "Python developer"]
    first = page.items[0]
    # Anchored at the span's lower edge, which is below the y=100 baseline
    assert first.transform[4] == pytest.approx(72, abs=1)
    assert first.transform[5] < PAGE_HEIGHT - 100
    assert first.font_size == pytest.approx(12)
    assert first.width > 0 and first.height > 0


def test_extract_text_map_from_pdf(cv_pdf):
    text_map = extract_text_map(cv_pdf)
    assert [(b.page_index, b.text) for b in text_map.blocks] == [
        (0, "Jane Doe"),
        (0, "Python developer"),
        (1, "References available"),
    ]
    assert text_map.num_pages == 2


def test_malformed_bytes_raise_extraction_error():
    with pytest.raises(ExtractionError):
        extract_text_map(b"this is not a pdf")


def test_round_trip_without_edits_keeps_text(cv_pdf):
    text_map = extract_text_map(cv_pdf)
    output = PyMuPDFSink().regenerate(cv_pdf, text_map)
    assert output.startswith(b"%PDF")
    assert _texts(output) == _texts(cv_pdf)


def test_modified_block_is_redrawn_and_input_untouched(cv_pdf):
    pristine = bytes(cv_pdf)
    text_map = extract_text_map(cv_pdf)
    target = text_map.blocks[1]
    edited = replace_text_in_block(text_map, target, "Lead developer")

    output = PyMuPDFSink().regenerate(cv_pdf, edited)

    assert cv_pdf == pristine
    with fitz.open(stream=output, filetype="pdf") as doc:
        page_text = doc[0].get_text()
        assert "Lead developer" in page_text
        assert "References available" in doc[1].get_text()


def test_rerendering_settled_map_changes_nothing(cv_pdf):
    text_map = extract_text_map(cv_pdf)
    edited = replace_text_in_block(text_map, text_map.blocks[0], "Jane Q. Doe")
    sink = PyMuPDFSink()

    once = sink.regenerate(cv_pdf, edited)
    twice = sink.regenerate(once, settle(edited))
    assert _texts(twice) == _texts(once)


def test_corrupt_input_raises_regeneration_error(cv_pdf):
    text_map = extract_text_map(cv_pdf)
    with pytest.raises(RegenerationError):
        PyMuPDFSink().regenerate(b"garbage", text_map)


def test_session_end_to_end(cv_pdf):
    with EditSession.open(cv_pdf) as session:
        block = session.text_map.blocks[1]
        result = session.apply(EditRequest(
            original_text="python developer",
            suggested_text="Backend engineer focused on Python services",
            page=1,
            region=Box(x=block.box.x + 5, y=block.box.y + 2, width=20, height=4),
        ))
        assert result.applied
        output = session.render()

    with fitz.open(stream=output, filetype="pdf") as doc:
        assert "Backend" in doc[0].get_text()


def test_typographic_punctuation_is_drawn_with_real_glyphs(cv_pdf):
    text_map = extract_text_map(cv_pdf)
    replacement = "Lead developer – Python’s • café"
    edited = replace_text_in_block(text_map, text_map.blocks[1], replacement)

    output = PyMuPDFSink().regenerate(cv_pdf, edited)

    with fitz.open(stream=output, filetype="pdf") as doc:
        page_text = " ".join(doc[0].get_text().split())
    assert replacement in page_text
    assert "·" not in page_text


def test_wrapped_punctuation_stays_inside_the_block(cv_pdf):
    text_map = extract_text_map(cv_pdf)
    block = text_map.blocks[1]
    edited = replace_text_in_block(text_map, block, "Lead – Python’s • senior’s – café")

    output = PyMuPDFSink().regenerate(cv_pdf, edited)

    with fitz.open(stream=output, filetype="pdf") as doc:
        page = doc[0]
        x0, _, x1, _ = block.box.flipped(page.rect.height)
        for word in ("Lead", "Python’s", "senior’s", "café"):
            hit = page.search_for(word)[0]
            assert hit.x0 >= x0 - 1
            assert hit.x1 <= x1 + 1


def test_cover_and_text_sit_on_the_flipped_block(cv_pdf):
    text_map = extract_text_map(cv_pdf)
    block = text_map.blocks[1]
    edited = replace_text_in_block(text_map, block, "Lead developer")

    output = PyMuPDFSink().regenerate(cv_pdf, edited)

    with fitz.open(stream=output, filetype="pdf") as doc:
        page = doc[0]
        expected = block.box.flipped(page.rect.height)
        covers = [
            drawing["rect"]
            for drawing in page.get_drawings()
            if drawing.get("fill") is not None and tuple(drawing["fill"]) == (1.0, 1.0, 1.0)
        ]
        assert any(tuple(rect) == pytest.approx(expected, abs=0.01) for rect in covers)

        hit = page.search_for("Lead developer")[0]
        assert hit.y0 == pytest.approx(expected[1], abs=2)
        assert hit.x0 == pytest.approx(expected[0], abs=2)


def test_session_opens_pdf_from_path(cv_pdf, tmp_path):
    path = tmp_path / "cv.pdf"
    path.write_bytes(cv_pdf)

    with EditSession.open_path(path) as session:
        assert [block.text for block in session.text_map.blocks] == [
            "Jane Doe",
            "Python developer",
            "References available",
        ]
        assert session.data == cv_pdf
