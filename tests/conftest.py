"""Shared fixtures for PERMA Profiler tests"""

import pytest

from backend.core.answer_store import AnswerStore
from backend.core.question_catalog import QuestionCatalog


@pytest.fixture
def catalog():
    """The shipped 23-question catalog"""
    return QuestionCatalog.from_file()


@pytest.fixture
def store(catalog):
    return AnswerStore(catalog)

