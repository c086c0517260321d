"""End-to-end tests for interior assembly."""

import asyncio
from io import BytesIO

import pytest
from pypdf import PdfReader
from reportlab.pdfgen import canvas

from coloring_builder.config.sizes import DEFAULT_GEOMETRY, PageGeometry
from coloring_builder.errors import LayoutConfigurationError, SerializationError
from coloring_builder.models.book import IllustrationPage
from coloring_builder.renderer.page_composer import PageKind
from coloring_builder.renderer.pdf_renderer import (
    assemble,
    generate_document,
    generate_document_async,
    write_document,
)
from coloring_builder.validator.layout_checker import assert_safe_area


def _read(pdf_bytes: bytes) -> PdfReader:
    return PdfReader(BytesIO(pdf_bytes))


def _draws_image(page) -> bool:
    contents = page.get_contents()
    return contents is not None and b" Do" in contents.get_data()


class TestPageCount:
    @pytest.mark.parametrize("count", [0, 1, 3, 7])
    def test_page_count_is_illustrations_plus_two(self, make_book, count):
        reader = _read(generate_document(make_book(count)))
        assert len(reader.pages) == count + 2

    def test_every_page_is_letter_size(self, make_book):
        reader = _read(generate_document(make_book(2)))
        for page in reader.pages:
            assert float(page.mediabox.width) == pytest.approx(612)
            assert float(page.mediabox.height) == pytest.approx(792)


def test_forest_friends_book(make_book):
    result = assemble(make_book(3))
    reader = _read(result.pdf_bytes)

    assert len(reader.pages) == 5
    assert "Forest Friends" in reader.pages[0].extract_text()
    title_line = result.layouts[0].lines[0]
    assert title_line.text == "Forest Friends"
    assert title_line.x_center == pytest.approx(DEFAULT_GEOMETRY.page_width / 2)

    for index in (2, 3, 4):
        assert result.layouts[index].kind == PageKind.ILLUSTRATION
        box = result.layouts[index].image
        assert box.width / box.height == pytest.approx(3 / 4)
        assert box.x + box.width / 2 == pytest.approx(306)
        assert box.y + box.height / 2 == pytest.approx(396)
        assert _draws_image(reader.pages[index])
    assert result.failures == []


def test_book_without_illustrations_has_two_pages(make_book):
    result = assemble(make_book(0))
    assert len(_read(result.pdf_bytes).pages) == 2
    assert [layout.kind for layout in result.layouts] == [PageKind.TITLE, PageKind.FRONT_MATTER]


def test_undecodable_image_leaves_blank_page(make_book, png_bytes):
    book = make_book(
        3,
        pages=(
            IllustrationPage(id="good-1", image=png_bytes),
            IllustrationPage(id="broken", image=b"\x89PNG not really"),
            IllustrationPage(id="good-2", image=png_bytes),
        ),
    )
    result = assemble(book)
    reader = _read(result.pdf_bytes)

    assert len(reader.pages) == 5
    assert [f.page_id for f in result.failures] == ["broken"]
    assert _draws_image(reader.pages[2])
    assert not _draws_image(reader.pages[3])
    assert _draws_image(reader.pages[4])


def test_same_book_gives_same_output(make_book):
    book = make_book(2)
    first = assemble(book)
    second = assemble(book)
    assert first.layouts == second.layouts
    assert first.page_count == second.page_count
    assert first.pdf_bytes == second.pdf_bytes


def test_all_pages_inside_safe_area(make_book):
    long_intro = "Every page invites you to slow down and add your own colors. " * 8
    result = assemble(make_book(2, introduction=long_intro), strict=True)
    assert_safe_area(result.layouts, DEFAULT_GEOMETRY)


def test_assembly_does_not_mutate_book(make_book):
    book = make_book(2)
    before = book.model_dump()
    generate_document(book)
    assert book.model_dump() == before


class TestStrictLayout:
    def test_strict_raises_when_margin_swallows_title(self, make_book):
        tight = PageGeometry(page_width=612, page_height=792, margin=250)
        with pytest.raises(LayoutConfigurationError):
            assemble(make_book(0), geometry=tight, strict=True)

    def test_lenient_mode_still_returns_document(self, make_book):
        tight = PageGeometry(page_width=612, page_height=792, margin=250)
        result = assemble(make_book(1), geometry=tight)
        assert len(_read(result.pdf_bytes).pages) == 3


def test_alternate_geometry_is_honoured(make_book):
    small = PageGeometry(page_width=432, page_height=648, margin=36)
    result = assemble(make_book(1), geometry=small, strict=True)
    page = _read(result.pdf_bytes).pages[0]
    assert float(page.mediabox.width) == pytest.approx(432)
    assert result.layouts[0].lines[0].x_center == pytest.approx(216)


def test_serialization_failure_is_fatal(make_book, monkeypatch):
    def broken_save(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(canvas.Canvas, "save", broken_save)
    with pytest.raises(SerializationError) as excinfo:
        generate_document(make_book(1))
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_async_wrapper_matches_sync(make_book):
    book = make_book(1)
    assert asyncio.run(generate_document_async(book)) == generate_document(book)


def test_write_document_creates_parent_dirs(make_book, tmp_path):
    out = tmp_path / "outputs" / "book.pdf"
    result = write_document(make_book(1), str(out))
    assert out.read_bytes() == result.pdf_bytes
