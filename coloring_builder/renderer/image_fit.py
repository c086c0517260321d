"""Aspect-preserving fit of an image into a bounding box."""

from dataclasses import dataclass

# Illustrations are generated at 3:4 (width:height)
ILLUSTRATION_ASPECT = 3.0 / 4.0


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Placement:
    """Rectangle with its top-left corner, y measured from the top edge."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def fit(aspect: float, bounds: Size) -> Size:
    """
    Largest size with the given width/height aspect that fits inside bounds.

    Width is tried as the binding constraint first; if the derived height
    overflows, height becomes binding instead.
    """
    if aspect <= 0 or bounds.width <= 0 or bounds.height <= 0:
        raise ValueError(f"fit() needs positive dimensions, got aspect={aspect} bounds={bounds}")

    width = bounds.width
    height = width / aspect
    if height > bounds.height:
        height = bounds.height
        width = height * aspect
    return Size(width=width, height=height)


def centered_in(size: Size, width: float, height: float, x0: float = 0.0, y0: float = 0.0) -> Placement:
    """Center size inside the (x0, y0, width, height) rectangle."""
    return Placement(
        x=x0 + (width - size.width) / 2.0,
        y=y0 + (height - size.height) / 2.0,
        width=size.width,
        height=size.height,
    )
