"""Change detection between two parses of the same document."""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pdf2checklist.models import ItemChange, Language, ParsedItem, TrackedItem


def _find_existing(existing: Sequence[ParsedItem], new_item: ParsedItem) -> Optional[ParsedItem]:
    for item in existing:
        if item.rule_id == new_item.rule_id or item.text_en == new_item.text_en:
            return item
    return None


def compare_items(
    existing: Sequence[ParsedItem],
    new_items: Sequence[ParsedItem],
    language: Language = "en",
    now: Optional[datetime] = None,
) -> List[TrackedItem]:
    """Compare freshly parsed items against a previous parse.

    An item matches an existing one with the same rule_id or identical English
    text. When matched and the English text changed, the returned item has its
    version bumped and the change appended to its history.

    Args:
        existing: Items from the earlier parse (TrackedItem keeps history)
        new_items: Items from the new parse
        language: Language recorded on new changes
        now: Timestamp for new changes (defaults to current UTC time)

    Returns:
        One TrackedItem per new item, in the same order
    """
    now = now or datetime.now(timezone.utc)
    result: List[TrackedItem] = []

    for new_item in new_items:
        tracked = TrackedItem(**new_item.model_dump())
        previous = _find_existing(existing, new_item)

        if previous is not None and previous.text_en != new_item.text_en:
            previous_version = getattr(previous, "version", 1)
            previous_changes = list(getattr(previous, "changes", []))
            tracked.version = previous_version + 1
            tracked.changes = previous_changes + [
                ItemChange(
                    date=now,
                    previous_text=previous.text_en,
                    new_text=new_item.text_en,
                    language=language,
                )
            ]

        result.append(tracked)

    return result
