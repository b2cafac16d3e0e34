"""Structure analysis of reconstructed pages for diagnosing parse results."""

import re
from typing import List

from pdf2checklist.language import Script, classify_script
from pdf2checklist.models import PageAnalysis, StructureAnalysis
from pdf2checklist.recognizers import ARTICLE_TITLE_RE, BULLET_RE, LIST_ITEM_RE, SUB_ITEM_RE

MAX_SAMPLES = 5
SNIPPET_LENGTH = 50

MAIN_NUMBER_RE = re.compile(r"^(\d+(?:[.\s]*[\-.]\s*\d+)?)[\s.]+(.+)")
ENGLISH_ARTICLE_RE = re.compile(r"^Article\s*\(\s*(\d+)\s*\)\s*(.+)")


class StructureAnalyzer:
    """Counts scripts and structural markers per page."""

    def analyze(self, file_name: str, pages: List[List[str]]) -> StructureAnalysis:
        """Analyze reconstructed pages.

        Args:
            file_name: Source file name
            pages: Page lines as produced by line reconstruction

        Returns:
            StructureAnalysis with one PageAnalysis per page
        """
        return StructureAnalysis(
            file_name=file_name,
            total_pages=len(pages),
            pages=[self._analyze_page(page_num, lines) for page_num, lines in enumerate(pages, 1)],
        )

    def _analyze_page(self, page_num: int, lines: List[str]) -> PageAnalysis:
        analysis = PageAnalysis(page_number=page_num, total_lines=len(lines))
        samples = analysis.sample_texts
        patterns = analysis.structure_patterns

        for line in lines:
            line = line.strip()
            if not line:
                continue

            # Language sampling
            script = classify_script(line)
            if script == Script.ARABIC:
                analysis.arabic_lines += 1
                bucket = samples.arabic
            elif script == Script.ENGLISH:
                analysis.english_lines += 1
                bucket = samples.english
            else:
                bucket = samples.mixed
            if len(bucket) < MAX_SAMPLES:
                bucket.append(line[:100])

            # Structural markers
            match = MAIN_NUMBER_RE.match(line)
            if match:
                patterns.main_numbers.append({"ref": match.group(1), "text": _snippet(match.group(2))})
                analysis.numbered_items += 1

            match = SUB_ITEM_RE.match(line)
            if match:
                patterns.sub_numbers.append({"ref": match.group(1), "text": _snippet(match.group(2))})

            match = ARTICLE_TITLE_RE.match(line)
            if match:
                patterns.articles.append({"type": "arabic", "number": match.group(1), "title": _snippet(match.group(2))})
            else:
                match = ENGLISH_ARTICLE_RE.match(line)
                if match:
                    patterns.articles.append({"type": "english", "number": match.group(1), "title": _snippet(match.group(2))})

            match = LIST_ITEM_RE.match(line)
            if match:
                patterns.list_items.append({"marker": match.group(1), "text": _snippet(match.group(2))})

            match = BULLET_RE.match(line)
            if match:
                patterns.bullets.append(_snippet(match.group(1)))
                analysis.bullet_points += 1

        return analysis


def _snippet(text: str) -> str:
    if len(text) <= SNIPPET_LENGTH:
        return text
    return text[:SNIPPET_LENGTH] + "..."
