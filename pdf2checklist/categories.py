"""Keyword-based category inference and regulatory content detection."""

import re
from typing import List, Optional, Tuple

DEFAULT_CATEGORY = "General Compliance"

# Checked in order; first match wins
CATEGORY_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("Anti-Money Laundering", ("aml", "money laundering", "غسل الأموال")),
    ("Counter Financing of Terrorism", ("cft", "terrorism", "terrorist financing", "إرهاب")),
    ("Know Your Customer", ("kyc", "know your customer", "customer due diligence", "اعرف عميلك")),
    ("Record Keeping", ("record", "documentation", "سجلات")),
    ("Risk Assessment", ("risk", "assessment", "مخاطر")),
    ("Compliance", ("compliance", "امتثال")),
    ("Reporting", ("report", "suspicious", "مشبوهة")),
    ("Sanctions", ("sanction", "عقوبات")),
    ("Cybersecurity", ("cyber", "security", "أمن سيبراني")),
]

OBLIGATION_KEYWORDS: Tuple[str, ...] = (
    "must", "shall", "should", "require", "ensure", "establish",
    "implement", "maintain", "conduct", "comply", "obligation", "responsibility",
    "يجب", "ينبغي", "التزام", "مسؤولية", "تطبيق", "الامتثال",
)

DOMAIN_KEYWORDS: Tuple[str, ...] = (
    "financial institution", "bank", "customer", "transaction",
    "aml", "cft", "kyc", "cbuae",
    "مؤسسة مالية", "عميل", "معاملة",
)

MIN_REGULATORY_LENGTH = 30

# Arabic "Article" keyword, in logical and in visually reversed order
ARABIC_ARTICLE = r"(?:المادة|ةداملا)"

REFERENCE_PATTERNS = [
    re.compile(r"(\d+\.\d+\.\d+)"),
    re.compile(r"(\d+\.\d+)"),
    re.compile(r"Article\s+(\d+)", re.IGNORECASE),
    re.compile(r"Chapter\s+(\d+)", re.IGNORECASE),
    re.compile(r"Section\s+(\d+)", re.IGNORECASE),
    re.compile(r"(\d+-\d+)"),
    re.compile(ARABIC_ARTICLE + r"\s+(\d+)"),
]


def infer_category(line: str) -> str:
    """Infer a taxonomy category from keywords in the line.

    Args:
        line: Source line (English, Arabic or mixed)

    Returns:
        Category label, or "General Compliance" when nothing matches
    """
    text = line.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def is_regulatory_content(line: str) -> bool:
    """Check whether a line states a requirement in a compliance context.

    Requires both an obligation keyword and a domain-context keyword.
    """
    if len(line) < MIN_REGULATORY_LENGTH:
        return False

    text = line.lower()
    has_obligation = any(keyword in text for keyword in OBLIGATION_KEYWORDS)
    has_context = any(keyword in text for keyword in DOMAIN_KEYWORDS)
    return has_obligation and has_context


def extract_reference(line: str) -> Optional[str]:
    """Extract the first embedded structural reference from a line."""
    for pattern in REFERENCE_PATTERNS:
        match = pattern.search(line)
        if match:
            return match.group(1)
    return None
