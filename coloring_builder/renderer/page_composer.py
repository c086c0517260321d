"""
Page Composer

Lays out and draws one physical page of the interior. There are exactly
three page kinds; each has its own layout function and ``layout_page``
dispatches on the kind.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import List, Optional

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from coloring_builder.config.sizes import PageGeometry
from coloring_builder.errors import ImageDrawError
from coloring_builder.models.book import Book, IllustrationPage
from coloring_builder.renderer.image_fit import ILLUSTRATION_ASPECT, Placement, Size, centered_in, fit
from coloring_builder.renderer.text_layout import (
    FontRole,
    FontSpec,
    TextLine,
    draw_text_line,
    layout_centered_block,
    wrap,
)

logger = logging.getLogger(__name__)

# Title page
TITLE_FONT = FontSpec(FontRole.HEADING, 32, bold=True)
SUBTITLE_FONT = FontSpec(FontRole.HEADING, 16)
AUTHOR_FONT = FontSpec(FontRole.BODY, 14)
TITLE_Y = 0.30
SUBTITLE_Y = 0.42
AUTHOR_Y = 0.85

# Front matter page
HEADING_TEXT = "Introduction"
HEADING_FONT = FontSpec(FontRole.HEADING, 22, bold=True)
INTRO_FONT = FontSpec(FontRole.BODY, 12)
COPYRIGHT_FONT = FontSpec(FontRole.BODY, 9)
HEADING_Y = 0.15
INTRO_GAP = 50.0
COPYRIGHT_LEADING = 12.0

# Illustration page: half a margin of extra vertical clearance
ILLUSTRATION_MARGINS = 2.5

# PIL modes reportlab embeds without conversion
_DIRECT_MODES = ("RGB", "RGBA", "L", "CMYK")


class PageKind(str, Enum):
    TITLE = "title"
    FRONT_MATTER = "front_matter"
    ILLUSTRATION = "illustration"


@dataclass(frozen=True)
class PageSpec:
    """What goes on one physical page, in document order."""
    kind: PageKind
    illustration: Optional[IllustrationPage] = None


@dataclass(frozen=True)
class Clearance:
    """A text block that must end before the next element starts."""
    label: str
    block_end: float
    limit: float


@dataclass
class PageLayout:
    """Computed positions of everything drawn on a page (y from the top edge)."""
    kind: PageKind
    page_number: int
    lines: List[TextLine] = field(default_factory=list)
    image: Optional[Placement] = None
    page_id: Optional[str] = None
    clearances: List[Clearance] = field(default_factory=list)


@dataclass(frozen=True)
class ImageLoad:
    """Outcome of decoding one illustration: a reader or an error, never both."""
    page_id: str
    reader: Optional[ImageReader] = None
    error: Optional[ImageDrawError] = None

    @property
    def ok(self) -> bool:
        return self.reader is not None and self.error is None


def page_specs(book: Book) -> List[PageSpec]:
    specs = [PageSpec(PageKind.TITLE), PageSpec(PageKind.FRONT_MATTER)]
    specs.extend(PageSpec(PageKind.ILLUSTRATION, illustration=page) for page in book.pages)
    return specs


def load_illustration(page: IllustrationPage) -> ImageLoad:
    """Decode an illustration's bytes. Failures are returned, not raised."""
    try:
        img = Image.open(BytesIO(page.image))
        img.load()
    except (OSError, ValueError, EOFError, SyntaxError, Image.DecompressionBombError) as e:
        return ImageLoad(page.id, error=ImageDrawError(page.id, f"cannot decode image: {e}", cause=e))

    if img.width <= 0 or img.height <= 0:
        return ImageLoad(page.id, error=ImageDrawError(page.id, f"image has empty size {img.size}"))

    if img.mode not in _DIRECT_MODES:
        img = img.convert("RGBA")
    return ImageLoad(page.id, reader=ImageReader(img))


def layout_title_page(book: Book, geometry: PageGeometry, page_number: int = 1) -> PageLayout:
    height = geometry.page_height
    title, title_height = layout_centered_block(book.title, TITLE_FONT, height * TITLE_Y, geometry)
    subtitle, subtitle_height = layout_centered_block(book.subtitle, SUBTITLE_FONT, height * SUBTITLE_Y, geometry)
    author, _ = layout_centered_block(f"By {book.author}", AUTHOR_FONT, height * AUTHOR_Y, geometry)
    clearances = [
        Clearance("title", height * TITLE_Y + title_height, height * SUBTITLE_Y),
        Clearance("subtitle", height * SUBTITLE_Y + subtitle_height, height * AUTHOR_Y),
    ]
    return PageLayout(PageKind.TITLE, page_number, lines=title + subtitle + author, clearances=clearances)


def layout_front_matter_page(book: Book, geometry: PageGeometry, page_number: int = 2) -> PageLayout:
    height = geometry.page_height
    heading_y = height * HEADING_Y
    heading, _ = layout_centered_block(HEADING_TEXT, HEADING_FONT, heading_y, geometry)
    intro_y = heading_y + INTRO_GAP
    intro, intro_height = layout_centered_block(book.introduction, INTRO_FONT, intro_y, geometry)

    # Copyright grows upward from the bottom margin
    copyright_lines = wrap(book.copyright_text, geometry.content_width, COPYRIGHT_FONT)
    last_baseline = height - geometry.margin
    count = len(copyright_lines)
    copyright_block = [
        TextLine(
            text=line,
            font=COPYRIGHT_FONT,
            x_center=geometry.page_width / 2.0,
            baseline_y=last_baseline - (count - 1 - index) * COPYRIGHT_LEADING,
            width=COPYRIGHT_FONT.measure(line),
        )
        for index, line in enumerate(copyright_lines)
    ]
    # Introduction must end one copyright line above the notice
    clearance = Clearance(
        "introduction",
        intro_y + intro_height,
        copyright_block[0].baseline_y - COPYRIGHT_LEADING,
    )
    return PageLayout(
        PageKind.FRONT_MATTER,
        page_number,
        lines=heading + intro + copyright_block,
        clearances=[clearance],
    )


def illustration_bounds(geometry: PageGeometry) -> Size:
    return Size(
        width=geometry.content_width,
        height=geometry.page_height - ILLUSTRATION_MARGINS * geometry.margin,
    )


def layout_illustration_page(page: IllustrationPage, geometry: PageGeometry, page_number: int) -> PageLayout:
    # Sized against the tighter bounds, centered on the full page
    size = fit(ILLUSTRATION_ASPECT, illustration_bounds(geometry))
    placement = centered_in(size, geometry.page_width, geometry.page_height)
    return PageLayout(PageKind.ILLUSTRATION, page_number, image=placement, page_id=page.id)


def layout_page(spec: PageSpec, book: Book, geometry: PageGeometry, page_number: int) -> PageLayout:
    if spec.kind == PageKind.TITLE:
        return layout_title_page(book, geometry, page_number)
    elif spec.kind == PageKind.FRONT_MATTER:
        return layout_front_matter_page(book, geometry, page_number)
    elif spec.kind == PageKind.ILLUSTRATION:
        if spec.illustration is None:
            raise ValueError(f"Illustration page {page_number} has no illustration")
        return layout_illustration_page(spec.illustration, geometry, page_number)
    raise ValueError(f"Unknown page kind '{spec.kind}'")


def compose_page(
    c: Canvas,
    layout: PageLayout,
    geometry: PageGeometry,
    image: Optional[ImageLoad] = None,
) -> Optional[ImageDrawError]:
    """
    Draw a laid-out page onto the current canvas page.

    Args:
        c: ReportLab canvas positioned on a fresh page
        layout: Page layout from ``layout_page``
        geometry: Page format
        image: Decoded illustration for illustration pages

    Returns:
        The image error if the illustration could not be placed (the page is
        left blank), otherwise None
    """
    for line in layout.lines:
        draw_text_line(c, line, geometry)

    if layout.image is None:
        return None

    if image is None:
        error = ImageDrawError(layout.page_id or str(layout.page_number), "no image supplied")
    elif not image.ok:
        error = image.error
    else:
        box = layout.image
        try:
            c.drawImage(
                image.reader,
                box.x,
                geometry.page_height - box.bottom,
                width=box.width,
                height=box.height,
                mask="auto",
            )
            return None
        except Exception as e:
            error = ImageDrawError(image.page_id, f"cannot place image: {e}", cause=e)

    logger.error("Leaving page %d blank: %s", layout.page_number, error)
    return error
