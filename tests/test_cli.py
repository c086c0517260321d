import json

from click.testing import CliRunner

from main import main


def _write_manifest(tmp_path, png_bytes, **overrides):
    (tmp_path / "p1.png").write_bytes(png_bytes)
    (tmp_path / "p2.png").write_bytes(png_bytes)
    manifest = {
        "title": "Forest Friends",
        "subtitle": "A Coloring Adventure",
        "author": "Jane Doe",
        "introduction": "Welcome!",
        "copyrightText": "© 2024 Jane Doe.",
        "pages": [{"id": "1", "image": "p1.png"}, {"id": "2", "image": "p2.png"}],
    }
    manifest.update(overrides)
    path = tmp_path / "book.json"
    path.write_text(json.dumps(manifest), encoding="utf-8")
    return path


def test_generates_and_validates(tmp_path, png_bytes):
    manifest = _write_manifest(tmp_path, png_bytes)
    out = tmp_path / "out" / "interior.pdf"
    runner = CliRunner()

    result = runner.invoke(main, ["--book", str(manifest), "--out", str(out), "--strict"])
    assert result.exit_code == 0, result.output
    assert "4 pages" in result.output
    assert out.exists()

    result = runner.invoke(main, ["--validate-path", str(out), "--validate-pages", "4"])
    assert result.exit_code == 0, result.output
    assert "No issues found" in result.output


def test_validation_failure_exits_nonzero(tmp_path, png_bytes):
    manifest = _write_manifest(tmp_path, png_bytes)
    out = tmp_path / "interior.pdf"
    runner = CliRunner()
    runner.invoke(main, ["--book", str(manifest), "--out", str(out)])

    result = runner.invoke(main, ["--validate-path", str(out), "--validate-pages", "10"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_default_output_name_uses_title(tmp_path, png_bytes):
    manifest = _write_manifest(tmp_path, png_bytes, title="", subtitle="")
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(main, ["--book", str(manifest), "--apply-defaults"])
        assert result.exit_code == 0, result.output
        assert "outputs/ColorBook_Masterpiece_KDP.pdf" in result.output


def test_requires_book_or_validate_path():
    result = CliRunner().invoke(main, [])
    assert result.exit_code != 0
    assert "--book" in result.output


def test_broken_manifest_reports_error(tmp_path):
    path = tmp_path / "book.json"
    path.write_text(json.dumps({"title": "only a title"}), encoding="utf-8")
    result = CliRunner().invoke(main, ["--book", str(path)])
    assert result.exit_code == 1
    assert "Could not load book manifest" in result.output
