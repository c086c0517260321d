"""Safe-area checks over computed page layouts."""

from typing import Iterable, List

from coloring_builder.config.sizes import PageGeometry
from coloring_builder.errors import LayoutConfigurationError
from coloring_builder.renderer.page_composer import PageLayout

TOLERANCE = 1e-6


def _inside(value: float, lo: float, hi: float) -> bool:
    return lo - TOLERANCE <= value <= hi + TOLERANCE


def check_safe_area(layout: PageLayout, geometry: PageGeometry) -> List[str]:
    """
    List every element of a page that leaves the safe area.

    Text lines are checked by baseline and horizontal extent, images by their
    full rectangle, and stacked text blocks for running into what follows.
    """
    left, top, right, bottom = geometry.safe_rect()
    problems: List[str] = []

    for line in layout.lines:
        if not _inside(line.baseline_y, top, bottom):
            problems.append(
                f"Page {layout.page_number}: baseline {line.baseline_y:.2f} of '{line.text[:30]}' "
                f"is outside {top:.2f}..{bottom:.2f} pt"
            )
        if not (_inside(line.left, left, right) and _inside(line.right, left, right)):
            problems.append(
                f"Page {layout.page_number}: line '{line.text[:30]}' spans {line.left:.2f}..{line.right:.2f} pt, "
                f"outside {left:.2f}..{right:.2f} pt"
            )

    box = layout.image
    if box is not None:
        corners_ok = (
            _inside(box.x, left, right)
            and _inside(box.right, left, right)
            and _inside(box.y, top, bottom)
            and _inside(box.bottom, top, bottom)
        )
        if not corners_ok:
            problems.append(
                f"Page {layout.page_number}: image {box.x:.2f},{box.y:.2f} {box.width:.2f}x{box.height:.2f} pt "
                f"leaves the safe area"
            )

    for clearance in layout.clearances:
        if clearance.block_end > clearance.limit + TOLERANCE:
            problems.append(
                f"Page {layout.page_number}: {clearance.label} block ends at {clearance.block_end:.2f} pt, "
                f"past the next element at {clearance.limit:.2f} pt"
            )

    return problems


def assert_safe_area(layouts: Iterable[PageLayout], geometry: PageGeometry):
    problems: List[str] = []
    for layout in layouts:
        problems.extend(check_safe_area(layout, geometry))
    if problems:
        raise LayoutConfigurationError("; ".join(problems))
