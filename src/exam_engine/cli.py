"""
Exam Engine command line

Offline tooling around the engine: check a question set file, grade a set
of answers against it, and look at (or remove) an autosaved attempt.

Usage:
    # Validate a question set
    exam-engine validate paper.json

    # Score answers ({"1": "B", "2": "42"}) with a per-question review
    exam-engine score paper.json answers.json --review

    # Show the autosaved attempt for a session key
    exam-engine inspect --store-dir ~/.exam_engine paper.pdf-1712345678

    # Remove it
    exam-engine inspect --store-dir ~/.exam_engine paper.pdf-1712345678 --clear
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .core.errors import InvalidQuestionSet, ValidationError
from .core.models.attempt import Attempt
from .core.utils.serialization import deserialize_attempt
from .engine.config import EngineConfig
from .engine.navigation import status_counts
from .engine.scoring import Outcome, answered_count, review, score
from .providers.json_file import JsonQuestionSetProvider
from .storage.file_store import FileStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def _load_config(path: Optional[Path]) -> EngineConfig:
    if path is None:
        return EngineConfig()
    with open(path, "r", encoding="utf-8") as f:
        return EngineConfig.from_dict(json.load(f))


def _load_answers(path: Path) -> dict[int, str]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Answers file must contain a JSON object of qid -> answer: {path}")
    return {int(qid): str(value) for qid, value in data.items()}


# ─────────────────────────────────────────────────────────────────────────────
# Subcommands
# ─────────────────────────────────────────────────────────────────────────────

def cmd_validate(args: argparse.Namespace, config: EngineConfig) -> int:
    question_set = JsonQuestionSetProvider(args.question_set).load()
    types: dict[str, int] = {}
    for question in question_set.questions:
        types[question.qtype.value] = types.get(question.qtype.value, 0) + 1
    ungradable = sum(1 for q in question_set.questions if not q.is_gradable)

    print(f"OK: {question_set.meta.title or args.question_set.name}")
    print(f"  questions: {question_set.total_questions} "
          + ", ".join(f"{name}={count}" for name, count in sorted(types.items())))
    print(f"  passages:  {question_set.total_passages}")
    if ungradable:
        print(f"  without answer key: {ungradable}")
    return 0


def cmd_score(args: argparse.Namespace, config: EngineConfig) -> int:
    question_set = JsonQuestionSetProvider(args.question_set).load()
    answers = _load_answers(args.answers)

    unknown = sorted(qid for qid in answers if not question_set.has_question(qid))
    if unknown:
        logger.warning(f"Ignoring answers for unknown qids: {unknown}")

    attempt = Attempt.fresh(
        question_set.qids,
        upload_id=args.question_set.name,
        user_id=config.user_id,
        duration_sec=config.duration_sec,
    )
    attempt.answers = {qid: value for qid, value in answers.items() if question_set.has_question(qid)}
    result = score(attempt, question_set)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"Score: {result.raw}")
        print(f"  answered:     {result.total_answered}/{question_set.total_questions}")
        print(f"  MCQ correct:  {result.mcq_correct}")
        print(f"  MCQ wrong:    {result.mcq_wrong}")
        print(f"  TITA correct: {result.tita_correct}")

    if args.review:
        for row in review(attempt, question_set):
            key = row.question.answer_key if row.question.answer_key is not None else "-"
            answer = row.answer or "-"
            marker = "*" if row.outcome is Outcome.CORRECT else " "
            print(f"{marker} Q{row.qid:<4} {row.question.qtype.value:<4} "
                  f"{row.outcome.value:<10} answer={answer} key={key}")
    return 0


def cmd_inspect(args: argparse.Namespace, config: EngineConfig) -> int:
    store = FileStore(args.store_dir)
    key = config.storage_key(args.session_key)

    if args.clear:
        store.delete(key)
        print(f"Cleared {args.session_key}")
        return 0

    blob = store.get(key)
    if blob is None:
        print(f"No saved attempt for {args.session_key}")
        return 1

    persisted = deserialize_attempt(blob)
    attempt = persisted.attempt
    remaining = attempt.timer.remaining_sec
    print(f"Attempt {attempt.upload_id} ({attempt.user_id})")
    print(f"  status:      {attempt.status.value}")
    print(f"  remaining:   {remaining // 60:02d}:{remaining % 60:02d} of "
          f"{attempt.timer.duration_sec // 60} min")
    print(f"  answered:    {answered_count(attempt.answers)}/{len(attempt.statuses)}")
    print(f"  current qid: {persisted.current_qid if persisted.current_qid is not None else '-'}")
    for status, count in status_counts(attempt.statuses).items():
        print(f"  {status.value + ':':<30} {count}")
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exam-engine",
        description="Exam attempt engine tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s validate paper.json
  %(prog)s score paper.json answers.json --review
  %(prog)s inspect --store-dir ./saves paper.pdf-1712345678
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, help="JSON file with engine settings")

    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Check a question set file")
    p_validate.add_argument("question_set", type=Path)
    p_validate.set_defaults(func=cmd_validate)

    p_score = sub.add_parser("score", help="Score answers against a question set")
    p_score.add_argument("question_set", type=Path)
    p_score.add_argument("answers", type=Path, help='JSON object of qid -> answer, e.g. {"1": "B"}')
    p_score.add_argument("--review", action="store_true", help="Print per-question outcomes")
    p_score.add_argument("--json", action="store_true", help="Print the score as JSON")
    p_score.set_defaults(func=cmd_score)

    p_inspect = sub.add_parser("inspect", help="Show or clear an autosaved attempt")
    p_inspect.add_argument("session_key")
    p_inspect.add_argument("--store-dir", type=Path, required=True, help="FileStore directory")
    p_inspect.add_argument("--clear", action="store_true", help="Delete the saved attempt")
    p_inspect.set_defaults(func=cmd_inspect)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = _load_config(args.config)
        return args.func(args, config)
    except InvalidQuestionSet as e:
        logger.error(f"Invalid question set: {e}")
        for detail in e.errors:
            print(f"  - {detail}", file=sys.stderr)
        return 2
    except ValidationError as e:
        logger.error(f"Saved attempt is corrupt: {e}")
        return 2
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
