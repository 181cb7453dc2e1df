"""
Module: providers.json_file

Purpose:
    Loads a question set from a JSON file on disk. The payload is checked
    against the question set schema before any model is built, and the
    parsed set is cached until the file changes.

Key Classes:
    - JsonQuestionSetProvider: QuestionSetProvider backed by a JSON file

Dependencies:
    - jsonschema (via core.schemas.validator)

Used By:
    - cli: validate / score subcommands
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..core.models.question_set import QuestionSet
from ..core.utils.serialization import load_question_set_json

logger = logging.getLogger(__name__)


class JsonQuestionSetProvider:
    """
    Question set read from ``path``.

    Raises (from load()):
        FileNotFoundError: If the file does not exist
        InvalidQuestionSet: If the file is not a usable question set
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._cached: Optional[QuestionSet] = None
        self._cached_mtime: Optional[float] = None

    def load(self) -> QuestionSet:
        mtime = self.path.stat().st_mtime if self.path.exists() else None
        if self._cached is not None and mtime == self._cached_mtime:
            return self._cached

        question_set = load_question_set_json(self.path)
        logger.info(
            f"Loaded question set {question_set.meta.title or self.path.name!r}: "
            f"{question_set.total_questions} questions, {question_set.total_passages} passages"
        )
        self._cached = question_set
        self._cached_mtime = mtime
        return question_set
