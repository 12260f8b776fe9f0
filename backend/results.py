"""
Result types returned by ProfilerSession.handle()

These are the ONLY return types from the command handler.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from backend.contracts import Answer, Question
from backend.core.interpretation_mapper import Interpretation
from backend.utils.categories import Category


@dataclass(frozen=True)
class StepView:
    """
    What the presentation layer needs to render one question.

    Returned by: StartTest, SetScore, SetReflection, UpdateAnswer,
    NextQuestion, PreviousQuestion

    Attributes:
        question: Current question
        answer: Current answer (None if never visited)
        index: 0-based position in the catalog
        total: Number of questions
        can_go_back: Whether to offer 'Previous'
        can_finish: Whether to offer 'Finish' instead of 'Next'
    """
    question: Question
    answer: Optional[Answer]
    index: int
    total: int
    can_go_back: bool
    can_finish: bool

    @property
    def progress_text(self) -> str:
        return f"Question {self.index + 1} of {self.total}"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe view for the web API"""
        return {
            'question_id': self.question.id,
            'question': self.question.text,
            'scale': {
                'min': self.question.scale.min,
                'max': self.question.scale.max,
                'min_label': self.question.scale.min_label,
                'max_label': self.question.scale.max_label,
                'description': self.question.scale.describe(),
            },
            'score': self.answer.score if self.answer else None,
            'reflection': self.answer.reflection if self.answer else "",
            'index': self.index,
            'total': self.total,
            'progress': self.progress_text,
            'can_go_back': self.can_go_back,
            'can_finish': self.can_finish,
        }


@dataclass(frozen=True)
class TestResult:
    """
    Completed test outputs.

    Returned by: FinishTest

    Attributes:
        session_id: Session identifier
        scores: Category -> average, in report order
        interpretations: Category -> Interpretation, same order
        document: Rendered result document (not yet persisted)
        completed_at: Clock reading used for {{date}}
    """
    __test__ = False  # not a pytest test class

    session_id: str
    scores: Dict[Category, float]
    interpretations: Dict[Category, Interpretation]
    document: str
    completed_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe view for the web API"""
        return {
            'session_id': self.session_id,
            'scores': {c.value: round(s, 2) for c, s in self.scores.items()},
            'interpretations': [
                {
                    'category': item.category.value,
                    'name': item.name,
                    'score': round(item.score, 2),
                    'band': item.band.value,
                    'text': item.text,
                }
                for item in self.interpretations.values()
            ],
            'document': self.document,
            'completed_at': self.completed_at.isoformat(),
        }


@dataclass(frozen=True)
class IllegalCommand:
    """
    Command rejected by the session (invalid lifecycle transition).

    Examples:
    - Any command before StartTest
    - FinishTest when not on the last question
    - SetScore after the test is complete

    Attributes:
        reason: Human-readable explanation
        command_type: Name of rejected command type
    """
    reason: str
    command_type: str
