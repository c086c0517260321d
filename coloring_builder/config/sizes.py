# KDP trim sizes (in points). 72 points = 1 inch
# Interiors here are non-bleed: one safety margin on all four sides.

from dataclasses import dataclass
from typing import Tuple

INCH = 72.0

SIZES = {
    # Standard 8.5" x 11" coloring book trim
    "8.5x11": {
        "width": 8.5 * INCH,
        "height": 11.0 * INCH,
        # KDP non-bleed safety margin
        "margin": 0.75 * INCH,
        "bleed": False,
    },
}

DEFAULT_TRIM = "8.5x11"


@dataclass(frozen=True)
class PageGeometry:
    page_width: float
    page_height: float
    margin: float

    @classmethod
    def from_trim(cls, trim_key: str) -> "PageGeometry":
        if trim_key not in SIZES:
            raise ValueError(f"Unknown trim key '{trim_key}'. Available: {list(SIZES.keys())}")
        conf = SIZES[trim_key]
        return cls(page_width=conf["width"], page_height=conf["height"], margin=conf["margin"])

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.page_height - 2 * self.margin

    @property
    def pagesize(self) -> Tuple[float, float]:
        return (self.page_width, self.page_height)

    def safe_rect(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of the safe area, y measured from the top edge."""
        return (
            self.margin,
            self.margin,
            self.page_width - self.margin,
            self.page_height - self.margin,
        )


DEFAULT_GEOMETRY = PageGeometry.from_trim(DEFAULT_TRIM)
