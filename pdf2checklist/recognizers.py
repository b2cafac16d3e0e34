"""Line recognizers for the structural checklist pass.

Each recognizer is a pure function ``(LineContext, ParserState) -> Outcome | None``.
RECOGNIZERS lists them in precedence order; the first one returning an Outcome
wins and ``None`` falls through to the next. An Outcome may carry a new item,
text to append to the previously emitted item, and the updated parser state.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from pdf2checklist.categories import ARABIC_ARTICLE, extract_reference, infer_category, is_regulatory_content
from pdf2checklist.language import BilingualText, is_arabic, matches_language, separate_languages
from pdf2checklist.models import Language, ParsedItem, ParserState


class LineKind(str, Enum):
    SKIP = "skip"
    SECTION = "section"
    NUMBERED = "numbered"
    ARTICLE = "article"
    SUB_ITEM = "sub_item"
    LIST_ITEM = "list_item"
    BULLET = "bullet"
    REGULATORY_BLOCK = "regulatory_block"
    REGULATORY = "regulatory"
    CONTINUATION = "continuation"


@dataclass(frozen=True)
class LineContext:
    line: str
    language: Language
    next_line: Optional[str] = None


@dataclass(frozen=True)
class Outcome:
    kind: LineKind
    state: ParserState
    item: Optional[ParsedItem] = None
    append_text: Optional[str] = None
    consumes_next: bool = False


@dataclass(frozen=True)
class Recognizer:
    name: str
    handler: Callable[[LineContext, ParserState], Optional[Outcome]]


@dataclass(frozen=True)
class NumberedPattern:
    regex: re.Pattern
    # Three-level references defer to the sub-item tier while a parent is active
    nested: bool = False


MIN_LINE_LENGTH = 10

FOOTER_PATTERNS = [
    re.compile(r"^Page\s+\d+\s+of\s+\d+", re.IGNORECASE),
    re.compile(r"CBUAE Classification"),
    re.compile(r"^\s*\d+\s*$"),
]

EN_HEADER_PATTERNS = [
    re.compile(r"^[A-Z\d.\s]{3,}$"),
    re.compile(r"^CHAPTER\s+\d+", re.IGNORECASE),
    re.compile(r"^SECTION\s+\d+", re.IGNORECASE),
    re.compile(r"^PART\s+[IVX\d]+", re.IGNORECASE),
    re.compile(r"^ARTICLE\s+\d+", re.IGNORECASE),
]

# Negative lookahead keeps "1.1" from swallowing "1.1.a" / "1.1.2"
_NOT_DEEPER = r"(?!\.(?:[A-Za-z]|\d+)\b)"

NUMBERED_PATTERNS = [
    NumberedPattern(re.compile(r"^(\d+\.\d+)" + _NOT_DEEPER + r"[\s.:\-]+(.+)")),
    NumberedPattern(re.compile(r"^(?:Article|Chapter|Section)\s+(\d+)[\s.\-:]*(.+)", re.IGNORECASE)),
    NumberedPattern(re.compile(r"^(\d+-\d+)" + _NOT_DEEPER + r"[\s.:\-]+(.+)")),
    NumberedPattern(re.compile(r"^\((\d+)\)[\s.:\-]*(.+)")),
    NumberedPattern(re.compile(r"^(\d+)(?![.\-]\d)[.\s:\-]+(.{10,})")),
    NumberedPattern(re.compile(r"^(\d+\.\d+\.[a-z])[\s.:\-]*(.+)", re.IGNORECASE), nested=True),
    NumberedPattern(re.compile(r"^(\d+\.\d+\.\d+)[\s.:\-]*(.+)"), nested=True),
    NumberedPattern(re.compile(ARABIC_ARTICLE + r"\s+(\d+)\s*(.+)")),
    NumberedPattern(re.compile(r"^(Requirement\s+\d+|Obligation\s+\d+)[\s.:\-]*(.+)", re.IGNORECASE)),
]

ARTICLE_TITLE_RE = re.compile(r"^\s*\(\s*" + ARABIC_ARTICLE + r"\s+(\d+)\s*(.+?)\s*\)")
ENGLISH_ARTICLE_RE = re.compile(r"Article\s*\(\s*\d+\s*\)\s*(.+)")
SUB_ITEM_RE = re.compile(r"^(\d+[.\s]*[\-.]\s*\d+\.(?:[a-z]|\d+))[\s.]+(.+)", re.IGNORECASE)
LIST_ITEM_RE = re.compile(r"^\(([a-z\d]+)\)[\s.]+(.+)", re.IGNORECASE)
BULLET_RE = re.compile(r"^[•\-*][\s.]+(.+)")
EMBEDDED_REF_RE = re.compile(r"(\d+[.\-]\d+)")
STRUCTURAL_MARKER_RE = re.compile(r"^(?:\d|\(|[•\-*])")

MIN_NUMBERED_TEXT = 5
MIN_REGULATORY_TEXT = 20
MIN_REGULATORY_BLOCK_LINE = 50
MIN_CONTINUATION_LINE = 30


def _emit(state: ParserState, **fields) -> Tuple[ParsedItem, ParserState]:
    """Build the next item and advance the emission counter."""
    number = state.item_count + 1
    item = ParsedItem(rule_id=f"RULE-{number}", **fields)
    return item, state.model_copy(update={"item_count": number})


def _single_language(text: str, language: Language) -> dict:
    return {"text_en": text if language == "en" else "", "text_ar": text if language == "ar" else ""}


def _parent_fields(state: ParserState) -> dict:
    if not state.current_parent_ref:
        return {"parent": None, "parent_text": None}
    return {"parent": state.current_parent_ref, "parent_text": state.current_parent_text}


def skip_noise(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    """Ignore short lines, page numbers and footers."""
    if len(ctx.line) < MIN_LINE_LENGTH or any(p.search(ctx.line) for p in FOOTER_PATTERNS):
        return Outcome(LineKind.SKIP, state)
    return None


def is_section_header(line: str, language: Language) -> bool:
    """Check whether a line is a standalone section heading."""
    if language == "en":
        return any(p.match(line) for p in EN_HEADER_PATTERNS)
    return (
        is_arabic(line)
        and MIN_LINE_LENGTH < len(line) < 100
        and not re.search(r"\d", line)
        and len(line.split()) < 8
    )


def section_header(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    if not is_section_header(ctx.line, ctx.language):
        return None
    return Outcome(LineKind.SECTION, state.model_copy(update={"current_category": ctx.line.strip()}))


def match_numbered_item(line: str, parent_active: bool = False) -> Optional[Tuple[str, str]]:
    """Match a top-level numbered reference.

    Args:
        line: Line text
        parent_active: Whether an enclosing numbered item is active

    Returns:
        Tuple of (reference, body text) or None
    """
    for pattern in NUMBERED_PATTERNS:
        if pattern.nested and parent_active:
            continue
        match = pattern.regex.search(line)
        if match:
            ref, text = match.group(1), match.group(2)
            if text and len(text.strip()) > MIN_NUMBERED_TEXT:
                return ref.strip(), text.strip()
    return None


def numbered_item(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    if ARTICLE_TITLE_RE.match(ctx.line):
        return None
    parent_active = bool(state.current_parent_ref)
    # Sub-item references under an open parent belong to the sub-item tier,
    # even when the body mentions an article number
    if parent_active and SUB_ITEM_RE.match(ctx.line):
        return None
    matched = match_numbered_item(ctx.line, parent_active=parent_active)
    if not matched:
        return None

    ref, raw_text = matched
    separated = separate_languages(raw_text)
    target_text = separated.for_language(ctx.language)
    if len(target_text) <= MIN_NUMBERED_TEXT:
        return Outcome(LineKind.NUMBERED, state)

    state = state.model_copy(update={"current_parent_ref": ref, "current_parent_text": target_text})
    item, state = _emit(
        state,
        doc_ref=ref,
        text_en=separated.en,
        text_ar=separated.ar,
        category=state.current_category or infer_category(ctx.line),
        parent=None,
    )
    return Outcome(LineKind.NUMBERED, state, item=item)


def article_title(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    """Pair a parenthesised Arabic article title with an English one on the next line."""
    match = ARTICLE_TITLE_RE.match(ctx.line)
    if not match:
        return None

    article_num, title = match.group(1), match.group(2)
    english_title = ""
    if ctx.next_line:
        english_match = ENGLISH_ARTICLE_RE.search(ctx.next_line)
        if english_match:
            english_title = english_match.group(1).strip()

    if not title.strip() and not english_title:
        return Outcome(LineKind.ARTICLE, state)

    item, state = _emit(
        state,
        doc_ref=f"Article-{article_num}",
        text_en=english_title,
        text_ar=title.strip(),
        category=state.current_category or "Articles",
        parent=None,
    )
    return Outcome(LineKind.ARTICLE, state, item=item, consumes_next=bool(english_title))


def _child_outcome(
    kind: LineKind,
    ctx: LineContext,
    state: ParserState,
    doc_ref: str,
    separated: BilingualText,
) -> Outcome:
    target_text = separated.for_language(ctx.language)
    if not target_text:
        return Outcome(kind, state)
    item, new_state = _emit(
        state,
        doc_ref=doc_ref,
        category=state.current_category or infer_category(ctx.line),
        **_single_language(target_text, ctx.language),
        **_parent_fields(state),
    )
    return Outcome(kind, new_state, item=item)


def sub_item(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    match = SUB_ITEM_RE.match(ctx.line)
    if not match:
        return None
    ref, raw_text = match.group(1), match.group(2)
    return _child_outcome(LineKind.SUB_ITEM, ctx, state, ref.strip(), separate_languages(raw_text))


def list_item(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    match = LIST_ITEM_RE.match(ctx.line)
    if not match:
        return None
    marker, raw_text = match.group(1), match.group(2)
    doc_ref = f"{state.current_parent_ref}.{marker}" if state.current_parent_ref else f"({marker})"
    return _child_outcome(LineKind.LIST_ITEM, ctx, state, doc_ref, separate_languages(raw_text))


def bullet(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    match = BULLET_RE.match(ctx.line)
    if not match:
        return None
    if state.current_parent_ref:
        doc_ref = f"{state.current_parent_ref}.{state.item_count}"
    else:
        doc_ref = f"BULLET-{state.item_count + 1}"
    return _child_outcome(LineKind.BULLET, ctx, state, doc_ref, separate_languages(match.group(1)))


def regulatory_block(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    """Long Arabic-bearing or article-mentioning lines, typically mixed-language."""
    line = ctx.line
    if len(line) <= MIN_REGULATORY_BLOCK_LINE:
        return None
    if not (is_arabic(line) or "Article" in line or re.search(ARABIC_ARTICLE, line)):
        return None

    separated = separate_languages(line)
    if len(separated.for_language(ctx.language)) <= MIN_REGULATORY_TEXT:
        return Outcome(LineKind.REGULATORY_BLOCK, state)

    ref_match = EMBEDDED_REF_RE.search(line)
    doc_ref = ref_match.group(1) if ref_match else f"REG-{state.item_count + 1}"
    item, state = _emit(
        state,
        doc_ref=doc_ref,
        text_en=separated.en,
        text_ar=separated.ar,
        category=state.current_category or "Regulatory Content",
        parent=None,
    )
    return Outcome(LineKind.REGULATORY_BLOCK, state, item=item)


def regulatory_content(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    line = ctx.line
    if not is_regulatory_content(line):
        return None

    separated = separate_languages(line)
    if len(separated.for_language(ctx.language)) <= MIN_REGULATORY_TEXT:
        return Outcome(LineKind.REGULATORY, state)

    item, state = _emit(
        state,
        doc_ref=extract_reference(line) or f"REG-{state.item_count + 1}",
        text_en=separated.en,
        text_ar=separated.ar,
        category=state.current_category or infer_category(line),
        parent=None,
    )
    return Outcome(LineKind.REGULATORY, state, item=item)


def continuation(ctx: LineContext, state: ParserState) -> Optional[Outcome]:
    """Prose wrapped from the previous item.

    Appends to whichever item was emitted last, whatever its kind.
    """
    line = ctx.line
    if state.item_count == 0 or STRUCTURAL_MARKER_RE.match(line):
        return None
    if len(line) <= MIN_CONTINUATION_LINE or not matches_language(line, ctx.language):
        return None
    return Outcome(LineKind.CONTINUATION, state, append_text=line.strip())


RECOGNIZERS: Tuple[Recognizer, ...] = (
    Recognizer("skip", skip_noise),
    Recognizer("section_header", section_header),
    Recognizer("numbered_item", numbered_item),
    Recognizer("article_title", article_title),
    Recognizer("sub_item", sub_item),
    Recognizer("list_item", list_item),
    Recognizer("bullet", bullet),
    Recognizer("regulatory_block", regulatory_block),
    Recognizer("regulatory_content", regulatory_content),
    Recognizer("continuation", continuation),
)


def recognize_line(
    ctx: LineContext,
    state: ParserState,
    recognizers: Tuple[Recognizer, ...] = RECOGNIZERS,
) -> Optional[Outcome]:
    """Run recognizers in precedence order and return the first outcome."""
    for recognizer in recognizers:
        outcome = recognizer.handler(ctx, state)
        if outcome is not None:
            return outcome
    return None
