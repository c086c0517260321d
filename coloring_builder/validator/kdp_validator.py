from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Tuple, Union

from pypdf import PdfReader

from coloring_builder.config.sizes import SIZES


@dataclass
class ValidationIssue:
    level: str  # "error" | "warning" | "info"
    message: str


@dataclass
class ValidationReport:
    ok: bool
    trim_key: str
    page_count: int
    page_size_pt: Tuple[float, float]
    issues: List[ValidationIssue]


def _almost_equal(a: float, b: float, tol: float = 0.5) -> bool:
    return abs(a - b) <= tol


def validate_pdf(
    source: Union[str, bytes],
    trim_key: str = "8.5x11",
    expected_pages: Optional[int] = None,
) -> ValidationReport:
    """
    Check a generated interior against its KDP trim size.

    Args:
        source: PDF file path or the PDF bytes themselves
        trim_key: Trim size key from SIZES
        expected_pages: Page count the interior must have, if known
    """
    if trim_key not in SIZES:
        raise ValueError(f"Unknown trim key '{trim_key}'. Available: {list(SIZES.keys())}")

    target = SIZES[trim_key]
    target_w = float(target["width"])
    target_h = float(target["height"])

    issues: List[ValidationIssue] = []

    reader = PdfReader(BytesIO(source) if isinstance(source, bytes) else source)

    if reader.is_encrypted:
        issues.append(ValidationIssue("error", "PDF is encrypted. KDP requires unencrypted, printable PDFs."))

    num_pages = len(reader.pages)
    if num_pages == 0:
        issues.append(ValidationIssue("error", "PDF has no pages."))
    if expected_pages is not None and num_pages != expected_pages:
        issues.append(ValidationIssue("error", f"Page count {num_pages} does not match expected {expected_pages}."))

    first_w = None
    first_h = None
    pages_with_rotation = 0

    for i, page in enumerate(reader.pages, start=1):
        w = float(page.mediabox.width)
        h = float(page.mediabox.height)

        if not (_almost_equal(w, target_w) and _almost_equal(h, target_h)):
            issues.append(
                ValidationIssue(
                    "error",
                    f"Page {i} size {w:.2f}x{h:.2f} pt does not match trim size ({target_w:.2f}x{target_h:.2f} pt).",
                )
            )

        # Uniform MediaBox across pages
        if first_w is None:
            first_w, first_h = w, h
        elif not (_almost_equal(w, first_w) and _almost_equal(h, first_h)):
            issues.append(ValidationIssue("error", f"Page {i} size differs from first page ({first_w:.2f}x{first_h:.2f} pt)."))

        if page.rotation:
            pages_with_rotation += 1

    if pages_with_rotation:
        issues.append(ValidationIssue("warning", f"{pages_with_rotation} page(s) carry a /Rotate entry."))

    ok = not any(i.level == "error" for i in issues)
    return ValidationReport(
        ok=ok,
        trim_key=trim_key,
        page_count=num_pages,
        page_size_pt=(first_w or 0.0, first_h or 0.0),
        issues=issues,
    )
