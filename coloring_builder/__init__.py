"""KDP-ready coloring book interior assembly"""

from coloring_builder.models.book import Book, IllustrationPage, TargetAudience
from coloring_builder.renderer.pdf_renderer import generate_document

__all__ = ["Book", "IllustrationPage", "TargetAudience", "generate_document"]
