"""Parsing strategies for extracting checklist items from reconstructed lines."""

import logging
import re
from typing import List

from pdf2checklist.categories import extract_reference, infer_category, is_regulatory_content
from pdf2checklist.language import separate_languages
from pdf2checklist.models import Language, ParsedItem, ParserState
from pdf2checklist.recognizers import FOOTER_PATTERNS, RECOGNIZERS, LineContext, LineKind, recognize_line

logger = logging.getLogger(__name__)

DEFAULT_MAX_FALLBACK_ITEMS = 50


class ParsingStrategy:
    """Base class for parsing strategies."""

    name = "base"

    def parse(self, pages: List[List[str]], language: Language) -> List[ParsedItem]:
        """Extract checklist items from reconstructed page lines.

        Args:
            pages: Non-empty pages, each a list of lines in reading order
            language: Target language ("en" or "ar")

        Returns:
            Items in emission order (may be empty)
        """
        raise NotImplementedError


class StructuralStrategy(ParsingStrategy):
    """Line-by-line recognition of headers, numbered clauses, lists and prose."""

    name = "structural"

    def __init__(self, recognizers=RECOGNIZERS):
        self.recognizers = recognizers

    def parse(self, pages: List[List[str]], language: Language) -> List[ParsedItem]:
        items: List[ParsedItem] = []
        state = ParserState()

        # State and next-line lookahead carry across page boundaries
        lines = [line for page_lines in pages for line in page_lines]
        logger.debug("Scanning %d lines on %d pages", len(lines), len(pages))

        skip_next = False
        for i, line in enumerate(lines):
            if skip_next:
                skip_next = False
                continue

            next_line = lines[i + 1] if i + 1 < len(lines) else None
            ctx = LineContext(line=line, language=language, next_line=next_line)
            outcome = recognize_line(ctx, state, self.recognizers)
            if outcome is None:
                continue

            state = outcome.state
            skip_next = outcome.consumes_next

            if outcome.kind == LineKind.SECTION:
                logger.debug("Found category: %s", state.current_category)
            if outcome.item is not None:
                items.append(outcome.item)
            elif outcome.append_text and items:
                self._append_continuation(items[-1], outcome.append_text, language)

        logger.info("Structural pass found %d items", len(items))
        return items

    def _append_continuation(self, item: ParsedItem, text: str, language: Language) -> None:
        if language == "en":
            item.text_en = " ".join(part for part in (item.text_en, text) if part)
        else:
            item.text_ar = " ".join(part for part in (item.text_ar, text) if part)


class ContentBasedStrategy(ParsingStrategy):
    """Sentence-level scan for regulatory requirements, without structure."""

    name = "content"

    SKIP_PATTERNS = FOOTER_PATTERNS
    SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

    MIN_LINE_LENGTH = 50
    MIN_SENTENCE_LENGTH = 30
    MIN_TARGET_LENGTH = 20

    def __init__(self, max_items: int = DEFAULT_MAX_FALLBACK_ITEMS):
        self.max_items = max_items

    def parse(self, pages: List[List[str]], language: Language) -> List[ParsedItem]:
        items: List[ParsedItem] = []

        for lines in pages:
            for line in lines:
                line = line.strip()
                if len(line) <= self.MIN_LINE_LENGTH:
                    continue
                if any(p.search(line) for p in self.SKIP_PATTERNS):
                    continue

                for sentence in self.SENTENCE_SPLIT_RE.split(line):
                    sentence = sentence.strip()
                    if len(sentence) <= self.MIN_SENTENCE_LENGTH or not is_regulatory_content(sentence):
                        continue

                    separated = separate_languages(sentence)
                    if len(separated.for_language(language)) <= self.MIN_TARGET_LENGTH:
                        continue

                    number = len(items) + 1
                    items.append(ParsedItem(
                        rule_id=f"RULE-{number}",
                        doc_ref=extract_reference(sentence) or f"CONTENT-{number}",
                        text_en=separated.en,
                        text_ar=separated.ar,
                        category=infer_category(sentence),
                        parent=None,
                    ))

                    if len(items) >= self.max_items:
                        logger.info("Reached maximum of %d content-based items", self.max_items)
                        return items

        logger.info("Content-based pass found %d items", len(items))
        return items


class Extractor:
    """Runs parsing strategies in order until one yields items."""

    def __init__(self, max_fallback_items: int = DEFAULT_MAX_FALLBACK_ITEMS):
        self.strategies: List[ParsingStrategy] = [
            StructuralStrategy(),
            ContentBasedStrategy(max_items=max_fallback_items),
        ]

    def extract(self, pages: List[List[str]], language: Language) -> List[ParsedItem]:
        """Extract items with the first strategy that finds any.

        Returns:
            Items from the first productive strategy, or an empty list
        """
        for strategy in self.strategies:
            items = strategy.parse(pages, language)
            if items:
                logger.info("Strategy '%s' produced %d items", strategy.name, len(items))
                return items
            logger.info("Strategy '%s' found no items", strategy.name)
        return []
