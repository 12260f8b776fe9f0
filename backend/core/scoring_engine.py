"""
Scoring Engine - Category averages from the Answer Store

Algorithm:
1. P, E, R, M, A, N, H: arithmetic mean of three question scores.
   A missing answer contributes the unanswered-score default (0 under
   the current policy) and does not shrink the divisor.
2. PERMA: mean of the fifteen P/E/R/M/A question scores plus 'hap'
   (16 values). 'Lon' is excluded from the composite.
3. Lon: the loneliness item score, reported on its own.

Design principles:
- Pure: score() reads a snapshot and returns a new dict
- Deterministic: same snapshot, same result
- Fail fast: every referenced id is checked against the catalog at
  construction
"""

import logging
from typing import Dict, Iterable, Mapping

from backend.contracts import Answer
from backend.core.answer_store import UNANSWERED_SCORE_POLICY, UnansweredScorePolicy, default_score
from backend.core.question_catalog import QuestionCatalog
from backend.utils.categories import (
    CATEGORY_MEMBERS,
    HAPPINESS_QUESTION_ID,
    LONELINESS_QUESTION_ID,
    PERMA_DIMENSIONS,
    Category,
    all_referenced_question_ids,
)

logger = logging.getLogger(__name__)

# Report order of the score mapping
SCORE_ORDER = (
    Category.P, Category.E, Category.R, Category.M, Category.A,
    Category.N, Category.H, Category.PERMA, Category.LON,
)


class ScoringEngine:
    """Computes category scores for a completed session"""

    def __init__(self, catalog: QuestionCatalog,
                 policy: UnansweredScorePolicy = UNANSWERED_SCORE_POLICY):
        """
        Args:
            catalog: Question Catalog the categories refer to
            policy: Unanswered-score policy for missing answers

        Raises:
            ValueError: If a category references an id absent from the catalog
        """
        catalog.require(all_referenced_question_ids())
        self.catalog = catalog
        self.policy = policy
        logger.info(f"Scoring Engine initialized ({len(SCORE_ORDER)} categories, policy={policy.value})")

    def score(self, answers: Mapping[str, Answer]) -> Dict[Category, float]:
        """
        Compute every category score.

        Args:
            answers: Output of AnswerStore.all()

        Returns:
            dict: Category -> average, ordered P, E, R, M, A, N, H, PERMA, Lon
        """
        missing = [qid for qid in all_referenced_question_ids() if qid not in answers]
        if missing:
            logger.warning(f"Scoring with {len(missing)} unanswered question(s): {missing}")

        results: Dict[Category, float] = {}
        for category in SCORE_ORDER:
            if category is Category.PERMA:
                results[category] = self._mean(self._composite_ids(), answers)
            elif category is Category.LON:
                results[category] = float(self._value(LONELINESS_QUESTION_ID, answers))
            else:
                results[category] = self._mean(CATEGORY_MEMBERS[category], answers)

        return results

    @staticmethod
    def _composite_ids():
        ids = []
        for dimension in PERMA_DIMENSIONS:
            ids.extend(CATEGORY_MEMBERS[dimension])
        ids.append(HAPPINESS_QUESTION_ID)
        return ids

    def _value(self, question_id: str, answers: Mapping[str, Answer]) -> float:
        answer = answers.get(question_id)
        if answer is None:
            return default_score(self.catalog.get(question_id), self.policy)
        return answer.score

    def _mean(self, question_ids: Iterable[str], answers: Mapping[str, Answer]) -> float:
        values = [self._value(qid, answers) for qid in question_ids]
        return sum(values) / len(values)
