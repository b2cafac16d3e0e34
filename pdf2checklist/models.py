"""Data models for PDF to checklist conversion."""

from datetime import datetime
from typing import List, Optional, Dict, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Language = Literal["en", "ar"]


class TextFragment(BaseModel):
    """A piece of decoded PDF text with its page position."""
    content: str
    x: Optional[float] = 0.0
    y: Optional[float] = 0.0

    @field_validator("x", "y", mode="before")
    @classmethod
    def missing_coordinate_is_zero(cls, value):
        return 0.0 if value is None else value


class ParsedItem(BaseModel):
    """One extracted compliance rule/clause."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rule_id: str = Field(..., description="Sequential ID within one parse run (e.g., RULE-3)")
    doc_ref: str = Field(..., description="Structural reference (e.g., 1.19, 21-2.a, Article-5, REG-4)")
    text_en: str = ""
    text_ar: str = ""
    category: str
    parent: Optional[str] = Field(default=None, description="doc_ref of the enclosing numbered item")
    parent_text: Optional[str] = None

    def text_for(self, language: Language) -> str:
        return self.text_en if language == "en" else self.text_ar


class ParsedDocument(BaseModel):
    """Terminal artifact of a parse run."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    file_name: str
    language: Language
    items: List[ParsedItem] = []


class ParserState(BaseModel):
    """State threaded through the line-by-line structural scan."""
    model_config = ConfigDict(frozen=True)

    current_category: str = ""
    current_parent_ref: str = ""
    current_parent_text: str = ""
    item_count: int = 0


# Versioning Models

class ItemChange(BaseModel):
    """A recorded text revision of a checklist item."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: datetime
    previous_text: str
    new_text: str
    language: Language


class TrackedItem(ParsedItem):
    """Checklist item carrying its revision history."""
    version: int = 1
    changes: List[ItemChange] = []


# Analysis Models

class StructurePatterns(BaseModel):
    """Structural markers found on a page."""
    main_numbers: List[Dict[str, str]] = []
    sub_numbers: List[Dict[str, str]] = []
    articles: List[Dict[str, str]] = []
    list_items: List[Dict[str, str]] = []
    bullets: List[str] = []


class SampleTexts(BaseModel):
    """Sample lines per script class."""
    arabic: List[str] = []
    english: List[str] = []
    mixed: List[str] = []


class PageAnalysis(BaseModel):
    """Structure analysis of a single page."""
    page_number: int
    total_lines: int = 0
    arabic_lines: int = 0
    english_lines: int = 0
    numbered_items: int = 0
    bullet_points: int = 0
    structure_patterns: StructurePatterns = Field(default_factory=StructurePatterns)
    sample_texts: SampleTexts = Field(default_factory=SampleTexts)


class StructureAnalysis(BaseModel):
    """Structure analysis of a whole document."""
    file_name: str
    total_pages: int
    pages: List[PageAnalysis] = []


# QA Models

class QACheck(BaseModel):
    """Individual QA check result."""
    name: str
    score: float = Field(..., ge=0.0, le=1.0, description="Score between 0.0 and 1.0")
    threshold: float = Field(default=0.80, ge=0.0, le=1.0)
    passed: bool


class QADocument(BaseModel):
    """QA assessment of a parsed checklist."""
    file_name: str
    passed: bool
    score: float = Field(..., ge=0.0, le=1.0, description="Overall QA score")
    threshold: float = Field(default=0.80, ge=0.0, le=1.0)
    checks: Dict[str, QACheck] = Field(default_factory=dict)
    issues: List[str] = []
    warnings: List[str] = []
