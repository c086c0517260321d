"""
Text measurement, wrapping and centered drawing.

Two standard Type 1 families are used by role: Times for titles/headings and
Helvetica for body text and captions. All y values are measured from the top
edge of the page; conversion to the PDF origin happens only when drawing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from coloring_builder.config.sizes import PageGeometry

LEADING_FACTOR = 1.3


class FontRole(str, Enum):
    """Which of the two families a piece of text uses"""
    HEADING = "heading"  # serif
    BODY = "body"  # sans-serif


_FONT_NAMES = {
    (FontRole.HEADING, False): "Times-Roman",
    (FontRole.HEADING, True): "Times-Bold",
    (FontRole.BODY, False): "Helvetica",
    (FontRole.BODY, True): "Helvetica-Bold",
}


@dataclass(frozen=True)
class FontSpec:
    role: FontRole
    size: float
    bold: bool = False

    @property
    def name(self) -> str:
        return _FONT_NAMES[(self.role, self.bold)]

    def measure(self, text: str) -> float:
        return stringWidth(text, self.name, self.size)


@dataclass(frozen=True)
class TextLine:
    """One horizontally centered line of text with its baseline position."""
    text: str
    font: FontSpec
    x_center: float
    baseline_y: float
    width: float

    @property
    def left(self) -> float:
        return self.x_center - self.width / 2.0

    @property
    def right(self) -> float:
        return self.x_center + self.width / 2.0


def centered_line_height(font_size: float) -> float:
    return font_size * LEADING_FACTOR


def _break_word(word: str, max_width: float, font: FontSpec) -> List[str]:
    # Character-level split for a single word wider than the line
    chunks: List[str] = []
    current = ""
    for ch in word:
        candidate = current + ch
        if current and font.measure(candidate) > max_width:
            chunks.append(current)
            current = ch
        else:
            current = candidate
    chunks.append(current)
    return chunks


def wrap(text: str, max_width: float, font: FontSpec) -> List[str]:
    """
    Wrap text into lines no wider than max_width under the given font.

    Breaks happen at whitespace only, except that a word which alone is wider
    than max_width is split between characters. Newlines force a break.
    An empty string yields a single empty line.

    Args:
        text: Text to wrap
        max_width: Maximum rendered line width in points
        font: Font used to measure

    Returns:
        Ordered list of lines (never empty)
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")

    lines: List[str] = []
    for paragraph in text.replace("\r\n", "\n").split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            if font.measure(word) > max_width:
                if current:
                    lines.append(current)
                pieces = _break_word(word, max_width, font)
                lines.extend(pieces[:-1])
                current = pieces[-1]
                continue

            candidate = f"{current} {word}" if current else word
            if font.measure(candidate) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)

    return lines


def layout_centered_block(
    text: str,
    font: FontSpec,
    y_start: float,
    geometry: PageGeometry,
) -> Tuple[List[TextLine], float]:
    """Wrap text to the content width and stack it downward from y_start.

    Returns the positioned lines and the vertical extent they consume.
    """
    leading = centered_line_height(font.size)
    x_center = geometry.page_width / 2.0
    lines = wrap(text, geometry.content_width, font)
    placed = [
        TextLine(
            text=line,
            font=font,
            x_center=x_center,
            baseline_y=y_start + index * leading,
            width=font.measure(line),
        )
        for index, line in enumerate(lines)
    ]
    return placed, len(lines) * leading


def draw_text_line(c: Canvas, line: TextLine, geometry: PageGeometry):
    if not line.text:
        return
    c.saveState()
    c.setFont(line.font.name, line.font.size)
    c.drawCentredString(line.x_center, geometry.page_height - line.baseline_y, line.text)
    c.restoreState()


def draw_centered_block(
    c: Canvas,
    text: str,
    font: FontSpec,
    y_start: float,
    geometry: PageGeometry,
) -> float:
    """Draw a wrapped, centered block and return the height it consumed."""
    lines, consumed = layout_centered_block(text, font, y_start, geometry)
    for line in lines:
        draw_text_line(c, line, geometry)
    return consumed
