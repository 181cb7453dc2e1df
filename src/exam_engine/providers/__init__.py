"""
Providers Package

Sources of question sets for an exam session.
"""

from .base import QuestionSetProvider, StaticQuestionSetProvider
from .json_file import JsonQuestionSetProvider

__all__ = [
    "JsonQuestionSetProvider",
    "QuestionSetProvider",
    "StaticQuestionSetProvider",
]
