import json

import pytest

from pdf2checklist.analysis import StructureAnalyzer
from pdf2checklist.models import ParsedDocument, ParsedItem
from pdf2checklist.output import OutputGenerator
from pdf2checklist.qa import ChecklistValidator


@pytest.fixture
def document():
    return ParsedDocument(
        title="AML Circular",
        file_name="AML Circular.pdf",
        language="ar",
        items=[
            ParsedItem(rule_id="RULE-1", doc_ref="1.1", text_ar="يجب على البنوك", category="Record Keeping"),
            ParsedItem(
                rule_id="RULE-2",
                doc_ref="1.1.a",
                text_en="<script>alert(1)</script>",
                text_ar="الاحتفاظ بالسجلات",
                category="Record Keeping",
                parent="1.1",
                parent_text="يجب على البنوك",
            ),
        ],
    )


def test_checklist_json(tmp_path, document):
    path = OutputGenerator(str(tmp_path)).generate_checklist_json(document)

    assert path.name == "AML_Circular.ar.checklist.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["fileName"] == "AML Circular.pdf"
    assert data["items"][1]["ruleId"] == "RULE-2"
    assert data["items"][1]["parentText"] == "يجب على البنوك"
    assert data["items"][0]["parent"] is None
    # Arabic is written as-is, not \u-escaped
    assert "يجب على البنوك" in path.read_text(encoding="utf-8")


def test_checklist_json_round_trips(tmp_path, document):
    path = OutputGenerator(str(tmp_path)).generate_checklist_json(document)
    assert ParsedDocument.model_validate_json(path.read_text(encoding="utf-8")) == document


def test_qa_json(tmp_path, document):
    qa = ChecklistValidator().validate(document)
    path = OutputGenerator(str(tmp_path)).generate_qa_json(qa, document.language)

    assert path.name == "AML_Circular.ar.qa.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["passed"] is True
    assert "rule_id_sequence" in data["checks"]


def test_analysis_json(tmp_path):
    analysis = StructureAnalyzer().analyze("AML Circular.pdf", [["1.1 Banks must comply."]])
    path = OutputGenerator(str(tmp_path)).generate_analysis_json(analysis)

    assert path.name == "AML_Circular.analysis.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["total_pages"] == 1


def test_html_report(tmp_path, document):
    qa = ChecklistValidator().validate(document)
    path = OutputGenerator(str(tmp_path)).generate_html_report(document, qa)

    assert path.name == "AML_Circular.ar.report.html"
    html = path.read_text(encoding="utf-8")
    assert 'dir="rtl"' in html
    assert "Quality Assessment" in html
    assert "الاحتفاظ بالسجلات" in html
    assert "<script>" not in html
    assert "Record Keeping: 2" in html


def test_output_dir_is_created(tmp_path):
    target = tmp_path / "nested" / "out"
    OutputGenerator(str(target))
    assert target.is_dir()
