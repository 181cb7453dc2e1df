import os
import sys
from pathlib import Path

import pytest

# Qt widgets are never shown; run Qt without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import exam_engine
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from exam_engine.core.models import (  # noqa: E402
    MarkingScheme,
    Option,
    Passage,
    Question,
    QuestionSet,
    QuestionSetMeta,
    QuestionType,
)


def _abcd(*texts: str) -> tuple[Option, ...]:
    return tuple(Option(label, text) for label, text in zip("ABCD", texts))


# Common test fixtures
@pytest.fixture
def question_set() -> QuestionSet:
    """Five questions over three sections, one without an answer key."""
    return QuestionSet(
        meta=QuestionSetMeta(title="CAT 2023 Slot 1", marking=MarkingScheme.cat_default(), year=2023),
        passages=(Passage(passage_id=1, text="The passage.", title="RC 1", page_span=(2, 3)),),
        questions=(
            Question(1, QuestionType.MCQ, "Main idea?", _abcd("w", "x", "y", "z"),
                     answer_key="B", passage_id=1, section="VARC", page_ref=2),
            Question(2, QuestionType.MCQ, "Tone?", _abcd("w", "x", "y", "z"),
                     answer_key="C", passage_id=1, section="VARC", page_ref=3),
            Question(3, QuestionType.TITA, "How many?", answer_key="42", section="QA", page_ref=5),
            Question(4, QuestionType.TITA, "Find x.", answer_key=None, section="QA", page_ref=6),
            Question(5, QuestionType.MCQ, "Which arrangement?", _abcd("w", "x", "y", "z"),
                     answer_key="A", section="DILR", page_ref=8),
        ),
    )


@pytest.fixture
def question_set_payload(question_set: QuestionSet) -> dict:
    """JSON payload of the ``question_set`` fixture."""
    return question_set.to_dict()
