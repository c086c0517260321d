from io import BytesIO

import pytest
from PIL import Image, ImageDraw

from coloring_builder.models.book import Book, IllustrationPage


def make_png(width: int = 300, height: int = 400) -> bytes:
    img = Image.new("RGB", (width, height), color="white")
    draw = ImageDraw.Draw(img)
    draw.ellipse((20, 20, width - 20, height - 20), outline="black", width=4)
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """3:4 line-art PNG."""
    return make_png()


@pytest.fixture
def make_book(png_bytes):
    def _make(page_count: int = 3, **overrides) -> Book:
        fields = dict(
            title="Forest Friends",
            subtitle="A Coloring Adventure",
            author="Jane Doe",
            introduction="Welcome!",
            copyright_text="© 2024 Jane Doe.",
            pages=tuple(
                IllustrationPage(id=f"p{i}", title=f"Page {i}", image=png_bytes)
                for i in range(1, page_count + 1)
            ),
        )
        fields.update(overrides)
        return Book(**fields)

    return _make
