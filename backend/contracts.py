"""
Semantic contracts for the PERMA Profiler.

This module defines immutable data structures that serve as contracts
between modules. These are NOT validators - they define shape and
semantics without enforcing rules. Validation happens where the data
enters the system (Question Catalog at load time, Answer Store at write
time).

Design principles:
- Frozen dataclasses (immutable after creation)
- No dependencies on other modules
- Definition layer only (no enforcement)

Contents:
- RatingScale: Bounds and end labels of a question's rating slider
- Question: One catalog item
- Answer: The respondent's current rating and reflection for one question

Usage:
    from backend.contracts import RatingScale, Question, Answer
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RatingScale:
    """
    Rating scale for a single question.

    The scale is data, not a constant: every question in the shipped
    catalog happens to use 0-10, but nothing downstream may assume it.

    Attributes:
        min: Lowest selectable score (inclusive)
        max: Highest selectable score (inclusive)
        min_label: Anchor text shown at the low end (e.g. 'Never')
        max_label: Anchor text shown at the high end (e.g. 'Always')

    Examples:
        >>> scale = RatingScale(min=0, max=10, min_label='Never', max_label='Always')
        >>> scale.describe()
        '0 = Never, 10 = Always'
        >>> scale.contains(11)
        False
    """
    min: int
    max: int
    min_label: str
    max_label: str

    def contains(self, score: float) -> bool:
        """True if score lies within [min, max]"""
        return self.min <= score <= self.max

    def midpoint(self) -> float:
        """Centre of the scale"""
        return self.min + (self.max - self.min) / 2

    def describe(self) -> str:
        """Slider description text, e.g. '0 = Never, 10 = Always'"""
        return f"{self.min} = {self.min_label}, {self.max} = {self.max_label}"


@dataclass(frozen=True)
class Question:
    """
    Immutable question representation from the Question Catalog.

    Attributes:
        id: Unique short identifier (e.g. 'P1', 'Lon', 'hap')
        text: Prompt shown to the respondent
        scale: Rating scale for this question

    Note:
        The catalog is fixed at process start. Questions are never
        mutated or removed during a session.
    """
    id: str
    text: str
    scale: RatingScale


@dataclass(frozen=True)
class Answer:
    """
    Respondent's current answer to one question.

    Answers are replaced (not mutated) by the Answer Store on every
    update, so a reference handed to the presentation layer is a stable
    snapshot.

    Attributes:
        question_id: Id of the question answered
        score: Selected rating, within the question's scale
        reflection: Optional free text (empty string when none given)
    """
    question_id: str
    score: float
    reflection: str = ""
