"""CLI commands using Typer."""

import json
from pathlib import Path
from typing import List, Optional

import typer

from pdf2checklist.analysis import StructureAnalyzer
from pdf2checklist.checklist import ChecklistParser
from pdf2checklist.config import settings
from pdf2checklist.errors import ChecklistParseError, NoItemsError
from pdf2checklist.logging_config import setup_logging
from pdf2checklist.models import ParsedDocument
from pdf2checklist.output import OutputGenerator
from pdf2checklist.qa import ChecklistValidator
from pdf2checklist.versioning import compare_items

app = typer.Typer(help="Regulatory PDF to compliance checklist converter")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_file)


def _validate_pdf_path(pdf_path: str) -> Path:
    pdf_file = Path(pdf_path)
    if not pdf_file.exists():
        typer.echo(f"Error: PDF file not found: {pdf_path}", err=True)
        raise typer.Exit(code=1)

    if not pdf_file.suffix.lower() == ".pdf":
        typer.echo(f"Error: Not a PDF file: {pdf_path}", err=True)
        raise typer.Exit(code=1)
    return pdf_file


@app.command()
def parse(
    pdf_path: str = typer.Argument(..., help="Path to the PDF file"),
    lang: List[str] = typer.Option(["en"], "--lang", "-l", help="Target language(s): en, ar"),
    out: str = typer.Option("out", "--out", "-o", help="Output directory"),
    report: bool = typer.Option(False, "--report", help="Also write an HTML checklist report"),
):
    """Extract checklist items and write them as JSON.

    Exit codes: 0 on success, 1 on input or decoding errors, 2 when the
    document yielded no checklist items.
    """
    pdf_file = _validate_pdf_path(pdf_path)
    for language in lang:
        if language not in ("en", "ar"):
            typer.echo(f"Error: Unsupported language: {language}", err=True)
            raise typer.Exit(code=1)

    output_gen = OutputGenerator(out)
    validator = ChecklistValidator(threshold=settings.qa_threshold)
    parser = ChecklistParser.from_file(pdf_file)

    for language in lang:
        typer.echo(f"Parsing {pdf_file.name} ({language})...")
        try:
            document = parser.parse(pdf_file.name, language)
        except NoItemsError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=2)
        except ChecklistParseError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

        qa_result = validator.validate(document)
        typer.echo(f"[OK] {len(document.items)} items, QA score: {qa_result.score:.2%}")

        json_path = output_gen.generate_checklist_json(document)
        qa_path = output_gen.generate_qa_json(qa_result, language)
        typer.echo(f"[OK] Checklist JSON: {json_path}")
        typer.echo(f"[OK] QA JSON: {qa_path}")

        if report:
            html_path = output_gen.generate_html_report(document, qa_result)
            typer.echo(f"[OK] HTML Report: {html_path}")

        if not qa_result.passed:
            typer.echo(f"[WARNING] QA failed: {len(qa_result.issues)} issues")
            for issue in qa_result.issues:
                typer.echo(f"  - {issue}")


@app.command()
def analyze(
    pdf_path: str = typer.Argument(..., help="Path to the PDF file"),
    out: str = typer.Option("out", "--out", "-o", help="Output directory"),
):
    """Write per-page script counts, samples and structural markers."""
    pdf_file = _validate_pdf_path(pdf_path)
    parser = ChecklistParser.from_file(pdf_file)

    try:
        pages = parser.extract_lines()
    except ChecklistParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    analysis = StructureAnalyzer().analyze(pdf_file.name, pages)
    analysis_path = OutputGenerator(out).generate_analysis_json(analysis)

    for page in analysis.pages:
        typer.echo(
            f"Page {page.page_number}: {page.arabic_lines} Arabic, {page.english_lines} English, "
            f"{page.numbered_items} numbered, {page.bullet_points} bullets"
        )
    typer.echo(f"[OK] Analysis JSON: {analysis_path}")


@app.command()
def compare(
    old_json: str = typer.Argument(..., help="Checklist JSON from the earlier parse"),
    new_json: str = typer.Argument(..., help="Checklist JSON from the new parse"),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Write tracked items to this JSON file"),
):
    """Compare two checklist JSON files and report changed items."""
    try:
        old_doc = ParsedDocument.model_validate_json(Path(old_json).read_text(encoding="utf-8"))
        new_doc = ParsedDocument.model_validate_json(Path(new_json).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    tracked = compare_items(old_doc.items, new_doc.items, new_doc.language)
    changed = [item for item in tracked if item.changes]

    typer.echo(f"{len(changed)} of {len(tracked)} items changed")
    for item in changed:
        change = item.changes[-1]
        typer.echo(f"  {item.rule_id} ({item.doc_ref}) v{item.version}")
        typer.echo(f"    - {change.previous_text}")
        typer.echo(f"    + {change.new_text}")

    if out:
        data = [item.model_dump(mode="json", by_alias=True) for item in tracked]
        Path(out).write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        typer.echo(f"[OK] Tracked items: {out}")


@app.command()
def version():
    """Show version information."""
    from pdf2checklist import __version__
    typer.echo(f"pdf2checklist version {__version__}")


if __name__ == "__main__":
    app()
