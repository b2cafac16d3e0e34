import json

import fitz
import pytest
from typer.testing import CliRunner

from pdf2checklist import __version__
from pdf2checklist.cli import app
from pdf2checklist.models import ParsedDocument, ParsedItem

runner = CliRunner()


@pytest.fixture
def menu_pdf(tmp_path):
    path = tmp_path / "menu.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Weekly cafeteria menu for the staff restaurant", fontsize=11)
    doc.save(str(path))
    doc.close()
    return path


def test_parse_writes_outputs(sample_pdf, tmp_path):
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["parse", str(sample_pdf), "--out", str(out_dir), "--report"])

    assert result.exit_code == 0, result.output
    assert "2 items" in result.output

    data = json.loads((out_dir / "AML_Circular.en.checklist.json").read_text(encoding="utf-8"))
    assert [item["docRef"] for item in data["items"]] == ["1.1", "1.1.a"]
    assert (out_dir / "AML_Circular.en.qa.json").exists()
    assert (out_dir / "AML_Circular.en.report.html").exists()


def test_parse_missing_file(tmp_path):
    result = runner.invoke(app, ["parse", str(tmp_path / "missing.pdf")])
    assert result.exit_code == 1
    assert "PDF file not found" in result.output


def test_parse_rejects_non_pdf(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    result = runner.invoke(app, ["parse", str(path)])
    assert result.exit_code == 1
    assert "Not a PDF file" in result.output


def test_parse_rejects_unknown_language(sample_pdf, tmp_path):
    result = runner.invoke(app, ["parse", str(sample_pdf), "--lang", "fr", "--out", str(tmp_path)])
    assert result.exit_code == 1
    assert "Unsupported language" in result.output


def test_parse_no_items_exit_code(menu_pdf, tmp_path):
    result = runner.invoke(app, ["parse", str(menu_pdf), "--out", str(tmp_path)])
    assert result.exit_code == 2
    assert "No compliance checklist items found" in result.output


def test_parse_broken_pdf(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"definitely not a pdf")
    result = runner.invoke(app, ["parse", str(path), "--out", str(tmp_path)])
    assert result.exit_code == 1
    assert "PDF parsing error" in result.output


def test_analyze(sample_pdf, tmp_path):
    result = runner.invoke(app, ["analyze", str(sample_pdf), "--out", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Page 1: 0 Arabic, 3 English" in result.output
    data = json.loads((tmp_path / "AML_Circular.analysis.json").read_text(encoding="utf-8"))
    assert data["total_pages"] == 1


def _write_document(path, text):
    document = ParsedDocument(
        title="circular",
        file_name="circular.pdf",
        language="en",
        items=[ParsedItem(rule_id="RULE-1", doc_ref="1.1", text_en=text, category="General Compliance")],
    )
    path.write_text(document.model_dump_json(by_alias=True), encoding="utf-8")


def test_compare(tmp_path):
    old_json, new_json = tmp_path / "old.json", tmp_path / "new.json"
    _write_document(old_json, "Banks must keep records.")
    _write_document(new_json, "Banks must keep records for five years.")
    tracked_json = tmp_path / "tracked.json"

    result = runner.invoke(app, ["compare", str(old_json), str(new_json), "--out", str(tracked_json)])

    assert result.exit_code == 0, result.output
    assert "1 of 1 items changed" in result.output
    tracked = json.loads(tracked_json.read_text(encoding="utf-8"))
    assert tracked[0]["version"] == 2
    assert tracked[0]["changes"][0]["previousText"] == "Banks must keep records."


def test_compare_bad_input(tmp_path):
    result = runner.invoke(app, ["compare", str(tmp_path / "a.json"), str(tmp_path / "b.json")])
    assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output
