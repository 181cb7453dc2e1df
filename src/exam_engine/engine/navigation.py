"""
Question navigator helpers: section filters, stepping within a filter and
status tallies for the legend. Sections are display filters only and never
affect scoring.
"""
from __future__ import annotations

from typing import Mapping, Optional

from ..core.models.attempt import QuestionStatus
from ..core.models.question_set import QuestionSet
from ..core.models.questions import Question

ALL_SECTIONS = "All"


def sections(question_set: QuestionSet) -> list[str]:
    """Distinct non-empty sections in first-seen order."""
    seen: list[str] = []
    for question in question_set.questions:
        if question.section and question.section not in seen:
            seen.append(question.section)
    return seen


def filter_questions(question_set: QuestionSet, section: Optional[str] = None) -> list[Question]:
    """Questions of ``section``; None or "All" means every question."""
    if section is None or section == ALL_SECTIONS:
        return list(question_set.questions)
    return [q for q in question_set.questions if q.section == section]


def adjacent_qid(
    question_set: QuestionSet,
    current_qid: int,
    step: int,
    section: Optional[str] = None,
) -> Optional[int]:
    """
    qid ``step`` positions away from ``current_qid`` within a section filter.

    Returns:
        The target qid, or None when stepping past either end or when the
        current question is not part of the filter
    """
    visible = [q.qid for q in filter_questions(question_set, section)]
    if current_qid not in visible:
        return None
    target = visible.index(current_qid) + step
    if 0 <= target < len(visible):
        return visible[target]
    return None


def status_counts(statuses: Mapping[int, QuestionStatus]) -> dict[QuestionStatus, int]:
    """Number of questions per status, every status present."""
    counts = {status: 0 for status in QuestionStatus}
    for status in statuses.values():
        counts[status] += 1
    return counts
