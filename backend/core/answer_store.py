"""
Answer Store - Single-owner mapping of question id to Answer

Responsibilities:
- Record score and reflection per question as the respondent progresses
- Apply the unanswered-score policy when an answer is first created
- Hand a catalog-ordered snapshot to the Scoring Engine

Design principles:
- Dumb container: no scoring or navigation logic
- Keys are always catalog ids (foreign ids are rejected)
- Session-scoped: nothing is written to disk
"""

import logging
from enum import Enum
from typing import Dict, Optional

from backend.contracts import Answer, Question
from backend.core.question_catalog import QuestionCatalog

logger = logging.getLogger(__name__)


class UnansweredScorePolicy(Enum):
    """
    Score used for a question that has no answer yet.

    ZERO: Contribute 0
    MIDPOINT: Contribute the centre of the question's scale
    """
    ZERO = "zero"
    MIDPOINT = "midpoint"


# Applied uniformly: new answers in the store and missing answers at scoring.
UNANSWERED_SCORE_POLICY = UnansweredScorePolicy.ZERO


def default_score(question: Question, policy: UnansweredScorePolicy = UNANSWERED_SCORE_POLICY) -> float:
    """
    Score for a question with no recorded answer.

    Args:
        question: Question being defaulted
        policy: Unanswered-score policy (module constant by default)

    Returns:
        float: 0 under ZERO, scale midpoint under MIDPOINT
    """
    if policy is UnansweredScorePolicy.MIDPOINT:
        return question.scale.midpoint()
    return 0


class AnswerStore:
    """Mutable store of the respondent's answers for one session"""

    def __init__(self, catalog: QuestionCatalog,
                 policy: UnansweredScorePolicy = UNANSWERED_SCORE_POLICY):
        """
        Initialize empty store bound to a catalog.

        Args:
            catalog: Question Catalog whose ids are valid keys
            policy: Unanswered-score policy for newly created answers
        """
        self.catalog = catalog
        self.policy = policy
        self._answers: Dict[str, Answer] = {}

    def _question(self, question_id: str) -> Question:
        question = self.catalog.get(question_id)
        if question is None:
            logger.error(f"Rejected answer for unknown question id: {question_id!r}")
            raise ValueError(f"Unknown question id: {question_id!r}")
        return question

    def get(self, question_id: str) -> Optional[Answer]:
        """
        Current answer, or None if the question was never visited.

        Raises:
            ValueError: If question_id is not in the catalog
        """
        self._question(question_id)
        return self._answers.get(question_id)

    def visit(self, question_id: str) -> Answer:
        """
        Mark a question as visited, creating the default answer if absent.

        Returns:
            Answer: Existing or newly created answer

        Raises:
            ValueError: If question_id is not in the catalog
        """
        question = self._question(question_id)
        answer = self._answers.get(question_id)
        if answer is None:
            answer = Answer(question_id=question_id, score=default_score(question, self.policy))
            self._answers[question_id] = answer
            logger.debug(f"Visited {question_id} (default score {answer.score})")
        return answer

    def set(self, question_id: str, score: Optional[float] = None,
            reflection: Optional[str] = None) -> Answer:
        """
        Partial update of an answer; the field not supplied is preserved.

        Args:
            question_id: Catalog question id
            score: New score within the question's scale, or None to keep
            reflection: New reflection text, or None to keep

        Returns:
            Answer: The updated answer

        Raises:
            ValueError: If question_id is unknown or score is out of range
            TypeError: If score is not a number or reflection not a string
        """
        question = self._question(question_id)

        if score is not None:
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                raise TypeError(f"score must be a number, got {type(score).__name__}")
            if not question.scale.contains(score):
                raise ValueError(
                    f"Score {score} for {question_id} outside scale "
                    f"[{question.scale.min}, {question.scale.max}]"
                )

        if reflection is not None and not isinstance(reflection, str):
            raise TypeError(f"reflection must be str, got {type(reflection).__name__}")

        current = self.visit(question_id)
        updated = Answer(
            question_id=question_id,
            score=current.score if score is None else score,
            reflection=current.reflection if reflection is None else reflection,
        )
        self._answers[question_id] = updated

        logger.debug(f"Answer updated: {question_id} score={updated.score}")
        return updated

    def is_visited(self, question_id: str) -> bool:
        return question_id in self._answers

    def all(self) -> Dict[str, Answer]:
        """Snapshot of all answers, in catalog order"""
        return {
            q.id: self._answers[q.id]
            for q in self.catalog.all()
            if q.id in self._answers
        }

    def __len__(self) -> int:
        return len(self._answers)
