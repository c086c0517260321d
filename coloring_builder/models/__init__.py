"""Book data models"""

from coloring_builder.models.book import (
    Book,
    IllustrationPage,
    TargetAudience,
    suggested_filename,
    with_defaults,
)

__all__ = ["Book", "IllustrationPage", "TargetAudience", "suggested_filename", "with_defaults"]
