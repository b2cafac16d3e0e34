"""Output generation for JSON and HTML reports."""

import json
from collections import Counter
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from pdf2checklist.models import ParsedDocument, QADocument, StructureAnalysis


class OutputGenerator:
    """Generates JSON and HTML output files."""

    def __init__(self, output_dir: str):
        """Initialize output generator.

        Args:
            output_dir: Output directory path
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _stem(self, file_name: str) -> str:
        return Path(file_name).stem.replace(" ", "_")

    def _write_json(self, model: BaseModel, output_path: Path, by_alias: bool = False) -> Path:
        data = model.model_dump(mode='json', by_alias=by_alias, exclude_none=False)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        return output_path

    def generate_checklist_json(self, document: ParsedDocument) -> Path:
        """Generate the checklist JSON file (camelCase keys).

        Args:
            document: ParsedDocument to serialize

        Returns:
            Path to generated JSON file
        """
        output_path = self.output_dir / f"{self._stem(document.file_name)}.{document.language}.checklist.json"
        return self._write_json(document, output_path, by_alias=True)

    def generate_qa_json(self, qa_document: QADocument, language: str) -> Path:
        """Generate QA JSON file.

        Returns:
            Path to generated JSON file
        """
        output_path = self.output_dir / f"{self._stem(qa_document.file_name)}.{language}.qa.json"
        return self._write_json(qa_document, output_path)

    def generate_analysis_json(self, analysis: StructureAnalysis) -> Path:
        """Generate structure analysis JSON file.

        Returns:
            Path to generated JSON file
        """
        output_path = self.output_dir / f"{self._stem(analysis.file_name)}.analysis.json"
        return self._write_json(analysis, output_path)

    def generate_html_report(self, document: ParsedDocument, qa_document: Optional[QADocument] = None) -> Path:
        """Generate HTML checklist report.

        Args:
            document: ParsedDocument to report on
            qa_document: Optional QADocument for QA information

        Returns:
            Path to generated HTML file
        """
        output_path = self.output_dir / f"{self._stem(document.file_name)}.{document.language}.report.html"

        html_content = self._generate_html_content(document, qa_document)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html_content)

        return output_path

    def _generate_html_content(self, document: ParsedDocument, qa_document: Optional[QADocument]) -> str:
        """Generate HTML content for report."""

        is_rtl = document.language == "ar"
        dir_attr = 'dir="rtl"' if is_rtl else ''
        qa_passed = bool(qa_document and qa_document.passed)

        html = f"""<!DOCTYPE html>
<html lang="{document.language}" {dir_attr}>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{self._escape_html(document.title)} - Checklist</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            margin: 20px;
            background-color: #f5f5f5;
            direction: {'rtl' if is_rtl else 'ltr'};
        }}
        .container {{
            max-width: 1200px;
            margin: 0 auto;
            background-color: white;
            padding: 30px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }}
        h1 {{
            color: #333;
            border-bottom: 3px solid #4CAF50;
            padding-bottom: 10px;
        }}
        h2 {{
            color: #555;
            margin-top: 30px;
            border-left: 4px solid #4CAF50;
            padding-left: 10px;
        }}
        .qa-section {{
            margin: 30px 0;
            padding: 20px;
            background-color: {'#d4edda' if qa_passed else '#f8d7da'};
            border-radius: 5px;
            border: 2px solid {'#28a745' if qa_passed else '#dc3545'};
        }}
        .qa-score {{
            font-size: 24px;
            font-weight: bold;
            color: {'#28a745' if qa_passed else '#dc3545'};
        }}
        .issue {{
            color: #dc3545;
            margin: 5px 0;
        }}
        .warning {{
            color: #ffc107;
            margin: 5px 0;
        }}
        .child td:first-child {{
            padding-{'right' if is_rtl else 'left'}: 24px;
        }}
        table {{
            width: 100%;
            border-collapse: collapse;
            margin: 15px 0;
        }}
        th, td {{
            border: 1px solid #ddd;
            padding: 8px;
            text-align: {'right' if is_rtl else 'left'};
            vertical-align: top;
        }}
        th {{
            background-color: #4CAF50;
            color: white;
        }}
    </style>
</head>
<body>
    <div class="container">
        <h1>{self._escape_html(document.title)}</h1>
        <p><strong>File:</strong> {self._escape_html(document.file_name)}</p>
        <p><strong>Language:</strong> {document.language}</p>
        <p><strong>Total items:</strong> {len(document.items)}</p>
"""

        if qa_document:
            html += f"""
        <div class="qa-section">
            <h2>Quality Assessment</h2>
            <div class="qa-score">Score: {qa_document.score:.2%} {'✓ PASSED' if qa_document.passed else '✗ FAILED'}</div>
            <p>Threshold: {qa_document.threshold:.2%}</p>
            <ul>
"""
            for check in qa_document.checks.values():
                status = "✓" if check.passed else "✗"
                html += f"                <li>{status} {check.name}: {check.score:.2%}</li>\n"
            html += "            </ul>\n"

            for issue in qa_document.issues:
                html += f"            <p class='issue'>{self._escape_html(issue)}</p>\n"
            for warning in qa_document.warnings:
                html += f"            <p class='warning'>{self._escape_html(warning)}</p>\n"
            html += "        </div>\n"

        # Category summary
        categories = Counter(item.category for item in document.items)
        if categories:
            html += "        <h2>Categories</h2>\n        <ul>\n"
            for category, count in categories.most_common():
                html += f"            <li>{self._escape_html(category)}: {count}</li>\n"
            html += "        </ul>\n"

        html += "        <h2>Checklist</h2>\n"
        html += "        <table>\n"
        html += "            <thead>\n"
        html += "                <tr><th>Rule</th><th>Reference</th><th>Category</th><th>Text</th><th>Parent</th></tr>\n"
        html += "            </thead>\n"
        html += "            <tbody>\n"

        for item in document.items:
            row_class = ' class="child"' if item.parent else ''
            text = item.text_for(document.language) or item.text_en or item.text_ar
            html += f"                <tr{row_class}>\n"
            html += f"                    <td><code>{item.rule_id}</code></td>\n"
            html += f"                    <td>{self._escape_html(item.doc_ref)}</td>\n"
            html += f"                    <td>{self._escape_html(item.category)}</td>\n"
            html += f"                    <td>{self._escape_html(text)}</td>\n"
            html += f"                    <td>{self._escape_html(item.parent or '')}</td>\n"
            html += "                </tr>\n"

        html += "            </tbody>\n"
        html += "        </table>\n"

        html += """
    </div>
</body>
</html>
"""

        return html

    def _escape_html(self, text: str) -> str:
        """Escape HTML special characters."""
        if not text:
            return ""
        return (text.replace("&", "&amp;")
                   .replace("<", "&lt;")
                   .replace(">", "&gt;")
                   .replace('"', "&quot;")
                   .replace("'", "&#x27;"))
