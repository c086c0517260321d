"""
Book data models

Defines the book handed to the assembler: text fields plus ordered
illustration pages carrying encoded raster images.
"""

import base64
import binascii
import json
import re
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TITLE = "ColorBook Masterpiece"
DEFAULT_SUBTITLE = "A Professional Coloring Experience"
DEFAULT_AUTHOR = "AI Artist"
DEFAULT_INTRODUCTION = "Welcome to your artistic journey."

_DATA_URL = re.compile(r"^data:(?P<mime>[\w/+.-]+)?(?:;[\w=-]+)*;base64,(?P<data>.*)$", re.DOTALL)


class TargetAudience(str, Enum):
    """Who the book is drawn for"""
    KIDS = "Kids"
    ADULTS = "Adults"


class IllustrationPage(BaseModel):
    """Single coloring page: one encoded raster image and its label"""
    id: str = Field(..., description="Opaque page ID, stable for the session")
    title: str = Field(default="", description="Image label, e.g. 'Page 1'")
    image: bytes = Field(..., description="Encoded raster image (PNG/JPEG)")
    prompt: str = Field(default="", description="Prompt the image was generated from")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_data_url(cls, page_id: str, data_url: str, title: str = "", prompt: str = "") -> "IllustrationPage":
        """Build a page from a ``data:image/...;base64,`` URL."""
        match = _DATA_URL.match(data_url.strip())
        if not match:
            raise ValueError(f"Page {page_id}: not a base64 data URL")
        try:
            image = base64.b64decode(match.group("data"), validate=False)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Page {page_id}: invalid base64 image data") from e
        return cls(id=page_id, title=title, image=image, prompt=prompt)

    @classmethod
    def from_file(cls, page_id: str, path: Path, title: str = "", prompt: str = "") -> "IllustrationPage":
        return cls(id=page_id, title=title or path.stem, image=Path(path).read_bytes(), prompt=prompt)


class Book(BaseModel):
    """Complete book, immutable while it is being assembled"""
    title: str = Field(..., description="Title page heading")
    subtitle: str = Field(..., description="Title page subheading")
    author: str = Field(..., description="Author credited on the title page")
    introduction: str = Field(..., description="Front matter body text")
    copyright_text: str = Field(..., alias="copyrightText", description="Front matter copyright notice")
    pages: Tuple[IllustrationPage, ...] = Field(default=(), description="Illustrations in render order")
    description: str = Field(default="", description="Marketing description (not rendered)")
    audience: TargetAudience = Field(default=TargetAudience.KIDS)
    theme: str = Field(default="")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_manifest(cls, manifest_path: str) -> "Book":
        """
        Load a book from a JSON manifest.

        Page entries take either ``imageUrl`` (a base64 data URL) or ``image``
        (a file path, relative to the manifest's directory).
        """
        path = Path(manifest_path)
        data: Dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
        base_dir = path.parent

        pages = []
        for index, entry in enumerate(data.get("pages", []), start=1):
            page_id = str(entry.get("id") or f"page-{index}")
            title = entry.get("title", f"Page {index}")
            prompt = entry.get("prompt", "")
            if entry.get("imageUrl"):
                pages.append(IllustrationPage.from_data_url(page_id, entry["imageUrl"], title=title, prompt=prompt))
            elif entry.get("image"):
                pages.append(IllustrationPage.from_file(page_id, base_dir / entry["image"], title=title, prompt=prompt))
            else:
                raise ValueError(f"Manifest page {page_id} has neither 'image' nor 'imageUrl'")

        fields = {k: v for k, v in data.items() if k != "pages"}
        return cls(pages=tuple(pages), **fields)


def with_defaults(
    pages: Sequence[IllustrationPage] = (),
    title: str = "",
    subtitle: str = "",
    author: str = "",
    introduction: str = "",
    copyright_text: str = "",
    generated_author: str = "",
    audience: TargetAudience = TargetAudience.KIDS,
    theme: str = "",
    year: Optional[int] = None,
) -> Book:
    """
    Build a Book from collected input and generated metadata, filling blanks.

    The user-entered author wins over the generated one. The assembler never
    substitutes defaults itself, so callers go through here first.
    """
    year = year or datetime.now().year
    final_author = author or generated_author or DEFAULT_AUTHOR
    return Book(
        title=title or DEFAULT_TITLE,
        subtitle=subtitle or DEFAULT_SUBTITLE,
        author=final_author,
        introduction=introduction or DEFAULT_INTRODUCTION,
        copyright_text=copyright_text or f"© {year} {author or DEFAULT_AUTHOR}. All rights reserved.",
        pages=tuple(pages),
        description=title,
        audience=audience,
        theme=theme,
    )


def suggested_filename(book: Book) -> str:
    """Download name offered for an exported interior."""
    stem = re.sub(r"\s+", "_", book.title)
    return f"{stem}_KDP.pdf"
