import logging
import os

import click

from coloring_builder.config.sizes import SIZES, PageGeometry
from coloring_builder.errors import ColoringBuilderError
from coloring_builder.models.book import Book, suggested_filename, with_defaults
from coloring_builder.renderer.pdf_renderer import write_document
from coloring_builder.validator.kdp_validator import validate_pdf


@click.command(help="Assemble a KDP-ready coloring book interior PDF, or validate an existing one.")
@click.option("--book", "book_path", type=click.Path(exists=True, dir_okay=False), default=None, help="JSON book manifest (title, subtitle, author, introduction, copyrightText, pages)")
@click.option("--out", "out_path", type=str, default=None, help="Output PDF path (default: outputs/<Title>_KDP.pdf)")
@click.option("--trim", type=click.Choice(list(SIZES.keys())), default="8.5x11", show_default=True, help="Trim size key")
@click.option("--strict", is_flag=True, default=False, help="Fail if any text or image leaves the safe area")
@click.option("--apply-defaults", "apply_defaults", is_flag=True, default=False, help="Fill blank title/subtitle/author/introduction/copyright with defaults")
@click.option("--validate-path", "validate_path", type=str, default=None, help="If provided, validates the given PDF and exits.")
@click.option("--validate-pages", "validate_pages", type=click.IntRange(min=1), default=None, help="Expected page count when validating")
@click.option("--verbose", is_flag=True, default=False, help="Log assembly details")
def main(book_path: str | None, out_path: str | None, trim: str, strict: bool, apply_defaults: bool,
         validate_path: str | None, validate_pages: int | None, verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    # Validation mode
    if validate_path:
        report = validate_pdf(validate_path, trim, expected_pages=validate_pages)
        click.echo(f"Validation for {validate_path} (trim={report.trim_key})")
        click.echo(f"Pages: {report.page_count}")
        click.echo(f"First page size: {report.page_size_pt[0]:.2f} x {report.page_size_pt[1]:.2f} pt")
        if not report.issues:
            click.echo("✅ No issues found.")
        else:
            for iss in report.issues:
                click.echo(f"{iss.level.upper()}: {iss.message}")
        if not report.ok:
            raise SystemExit(1)
        return

    if not book_path:
        raise click.UsageError("Either --book or --validate-path is required.")

    try:
        book = Book.from_manifest(book_path)
    except (OSError, ValueError) as e:
        click.echo(f"❌ Could not load book manifest: {e}")
        raise SystemExit(1)

    if apply_defaults:
        book = with_defaults(
            pages=book.pages,
            title=book.title,
            subtitle=book.subtitle,
            author=book.author,
            introduction=book.introduction,
            copyright_text=book.copyright_text,
            audience=book.audience,
            theme=book.theme,
        )

    if not out_path:
        out_path = os.path.join("outputs", suggested_filename(book))

    try:
        result = write_document(book, out_path, geometry=PageGeometry.from_trim(trim), strict=strict)
    except ColoringBuilderError as e:
        click.echo(f"❌ Export failed: {e}")
        raise SystemExit(1)

    for failure in result.failures:
        click.echo(f"WARNING: {failure}")
    click.echo(f"✅ Generated {out_path} with {result.page_count} pages at trim {trim}")


if __name__ == "__main__":
    main()
