"""
Document Assembler

Turns a Book into a print-ready interior PDF: title page, introduction and
copyright page, then one page per illustration, in that order.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from io import BytesIO
from typing import List

from reportlab.pdfgen import canvas

from coloring_builder.config.sizes import DEFAULT_GEOMETRY, PageGeometry
from coloring_builder.errors import ImageDrawError, LayoutConfigurationError, SerializationError
from coloring_builder.models.book import Book
from coloring_builder.renderer.page_composer import (
    PageKind,
    PageLayout,
    compose_page,
    layout_page,
    load_illustration,
    page_specs,
)
from coloring_builder.validator.layout_checker import check_safe_area

logger = logging.getLogger(__name__)

CREATOR = "kdp-coloring-builder"


@dataclass
class AssemblyResult:
    pdf_bytes: bytes
    layouts: List[PageLayout] = field(default_factory=list)
    failures: List[ImageDrawError] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.layouts)


def assemble(book: Book, geometry: PageGeometry = DEFAULT_GEOMETRY, strict: bool = False) -> AssemblyResult:
    """
    Assemble the interior PDF for a book.

    Args:
        book: Book to render; not modified
        geometry: Page format used for every layout computation
        strict: Raise LayoutConfigurationError when anything leaves the safe
            area instead of logging a warning

    Returns:
        AssemblyResult with the PDF bytes, every page layout, and the
        illustrations that could not be drawn
    """
    logger.info("Assembling interior '%s' with %d illustration(s)", book.title, len(book.pages))

    specs = page_specs(book)
    layouts = [layout_page(spec, book, geometry, number) for number, spec in enumerate(specs, start=1)]

    problems = [p for layout in layouts for p in check_safe_area(layout, geometry)]
    if problems:
        if strict:
            raise LayoutConfigurationError("; ".join(problems))
        for problem in problems:
            logger.warning("Safe area: %s", problem)

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=geometry.pagesize, invariant=1)
    c.setTitle(book.title)
    c.setAuthor(book.author)
    c.setSubject(book.subtitle)
    c.setCreator(CREATOR)

    failures: List[ImageDrawError] = []
    # The first page exists by construction; showPage() closes each page
    for spec, layout in zip(specs, layouts):
        image = None
        if layout.kind == PageKind.ILLUSTRATION:
            image = load_illustration(spec.illustration)
        error = compose_page(c, layout, geometry, image)
        if error is not None:
            failures.append(error)
        c.showPage()

    try:
        c.save()
    except Exception as e:
        raise SerializationError(f"Could not serialize interior '{book.title}': {e}") from e

    pdf_bytes = buf.getvalue()
    if not pdf_bytes:
        raise SerializationError(f"Serializer produced no output for '{book.title}'")

    logger.info(
        "Assembled %d page(s), %d byte(s), %d image failure(s)",
        len(layouts), len(pdf_bytes), len(failures),
    )
    return AssemblyResult(pdf_bytes=pdf_bytes, layouts=layouts, failures=failures)


def generate_document(book: Book, geometry: PageGeometry = DEFAULT_GEOMETRY, strict: bool = False) -> bytes:
    """Render a book and return the PDF bytes."""
    return assemble(book, geometry=geometry, strict=strict).pdf_bytes


async def generate_document_async(book: Book, geometry: PageGeometry = DEFAULT_GEOMETRY, strict: bool = False) -> bytes:
    """Run generate_document off the event loop, awaited as one unit."""
    return await asyncio.to_thread(generate_document, book, geometry, strict)


def write_document(book: Book, out_path: str, geometry: PageGeometry = DEFAULT_GEOMETRY, strict: bool = False) -> AssemblyResult:
    result = assemble(book, geometry=geometry, strict=strict)
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "wb") as f:
        f.write(result.pdf_bytes)
    return result
