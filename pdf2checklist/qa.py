"""QA validation of parsed checklists."""

import re
from typing import Dict, List, Tuple

from pdf2checklist.models import ParsedDocument, QACheck, QADocument

RULE_ID_RE = re.compile(r"^RULE-(\d+)$")


class ChecklistValidator:
    """Validates parsed checklists against structural invariants."""

    WEIGHTS = {
        "rule_id_sequence": 0.30,
        "parent_integrity": 0.30,
        "text_presence": 0.25,
        "target_language_coverage": 0.15,
    }

    # Failing any of these fails the document regardless of score
    HARD_CHECKS = ("rule_id_sequence", "parent_integrity", "text_presence")

    def __init__(self, threshold: float = 0.80):
        """Initialize QA validator.

        Args:
            threshold: Minimum score required to pass (default 0.80)
        """
        self.threshold = threshold

    def validate(self, document: ParsedDocument) -> QADocument:
        """Run QA validation on a parsed checklist.

        Args:
            document: The ParsedDocument to check

        Returns:
            QADocument with validation results
        """
        checks: Dict[str, QACheck] = {}
        issues: List[str] = []
        warnings: List[str] = []

        for key, check_fn, name in (
            ("rule_id_sequence", self._check_rule_id_sequence, "Rule ID Sequence"),
            ("parent_integrity", self._check_parent_integrity, "Parent Integrity"),
            ("text_presence", self._check_text_presence, "Text Presence"),
        ):
            score, check_issues = check_fn(document)
            checks[key] = self._make_check(name, score)
            issues.extend(check_issues)

        coverage = self._check_target_language_coverage(document)
        checks["target_language_coverage"] = self._make_check("Target Language Coverage", coverage)
        if coverage < self.threshold:
            warnings.append(
                f"Only {coverage:.0%} of items have '{document.language}' text"
            )

        overall_score = sum(checks[key].score * self.WEIGHTS[key] for key in checks)
        hard_failed = any(not checks[key].passed for key in self.HARD_CHECKS)

        return QADocument(
            file_name=document.file_name,
            passed=not hard_failed and overall_score >= self.threshold,
            score=min(overall_score, 1.0),
            threshold=self.threshold,
            checks=checks,
            issues=issues,
            warnings=warnings,
        )

    def _make_check(self, name: str, score: float) -> QACheck:
        return QACheck(name=name, score=score, threshold=self.threshold, passed=score >= self.threshold)

    def _check_rule_id_sequence(self, document: ParsedDocument) -> Tuple[float, List[str]]:
        """Rule IDs must be RULE-1, RULE-2, ... in order without gaps."""
        if not document.items:
            return 0.0, ["Document has no items"]

        issues = []
        for expected, item in enumerate(document.items, 1):
            match = RULE_ID_RE.match(item.rule_id)
            if not match or int(match.group(1)) != expected:
                issues.append(f"Expected RULE-{expected}, found {item.rule_id}")
        score = 1.0 - len(issues) / len(document.items)
        return max(score, 0.0), issues[:10]

    def _check_parent_integrity(self, document: ParsedDocument) -> Tuple[float, List[str]]:
        """Every parent must reference an earlier item's doc_ref."""
        children = [item for item in document.items if item.parent is not None]
        if not children:
            return 1.0, []

        issues = []
        seen_refs = set()
        for item in document.items:
            if item.parent is not None and item.parent not in seen_refs:
                issues.append(f"{item.rule_id} references unknown parent {item.parent}")
            seen_refs.add(item.doc_ref)
        return 1.0 - len(issues) / len(children), issues[:10]

    def _check_text_presence(self, document: ParsedDocument) -> Tuple[float, List[str]]:
        """Every item needs English or Arabic text."""
        if not document.items:
            return 0.0, []

        empty = [item.rule_id for item in document.items if not (item.text_en or item.text_ar)]
        issues = [f"{rule_id} has no text" for rule_id in empty[:10]]
        return 1.0 - len(empty) / len(document.items), issues

    def _check_target_language_coverage(self, document: ParsedDocument) -> float:
        if not document.items:
            return 0.0
        covered = sum(1 for item in document.items if item.text_for(document.language).strip())
        return covered / len(document.items)
