"""
Navigation Controller - Linear cursor over the Question Catalog

States:
    InProgress(i) for each i in [0, question_count)
    Completed (terminal)

Transitions:
    next()      i -> i + 1 while i < last, otherwise no-op
    previous()  i -> i - 1 while i > 0, otherwise no-op
    finish()    last -> Completed, otherwise no-op

No skipping, no branching, no answer gate before advancing: an
unanswered question falls back to the unanswered-score policy.
Out-of-bound calls are no-ops and report False, never raise.
"""

import logging
from typing import Optional

from backend.contracts import Answer, Question
from backend.core.answer_store import AnswerStore
from backend.core.question_catalog import QuestionCatalog

logger = logging.getLogger(__name__)


class NavigationController:
    """Bounded previous/next/finish state machine"""

    def __init__(self, catalog: QuestionCatalog, answer_store: AnswerStore):
        """
        Start at the first question.

        Args:
            catalog: Question Catalog to walk
            answer_store: Store that records visits
        """
        self.catalog = catalog
        self.answer_store = answer_store
        self._index = 0
        self._complete = False
        self._enter()

    def _enter(self) -> None:
        self.answer_store.visit(self.current_question.id)
        logger.debug(f"Entered question {self._index + 1}/{len(self.catalog)}")

    # =========================================================================
    # State
    # =========================================================================

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def question_count(self) -> int:
        return len(self.catalog)

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def is_last(self) -> bool:
        return self._index == len(self.catalog) - 1

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def current_question(self) -> Question:
        return self.catalog.all()[self._index]

    @property
    def current_answer(self) -> Optional[Answer]:
        return self.answer_store.get(self.current_question.id)

    # =========================================================================
    # Transitions
    # =========================================================================

    def next(self) -> bool:
        """Advance one question. Returns True if the cursor moved."""
        if self._complete or self.is_last:
            return False
        self._index += 1
        self._enter()
        return True

    def previous(self) -> bool:
        """Go back one question. Returns True if the cursor moved."""
        if self._complete or self.is_first:
            return False
        self._index -= 1
        self._enter()
        return True

    def finish(self) -> bool:
        """
        Complete the test from the last question.

        Returns:
            bool: True if the controller transitioned to Completed
        """
        if self._complete or not self.is_last:
            return False
        self._complete = True
        logger.info(f"Navigation complete after {len(self.catalog)} questions")
        return True
