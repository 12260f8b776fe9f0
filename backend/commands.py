"""
Command types for ProfilerSession control flow.

Commands are the ONLY public interface the presentation layer uses to
drive a test session. Each user input event (slider move, reflection
edit, navigation button) maps to one command.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StartTest:
    """
    Begin the test at the first question.

    Returns: StepView for question 1.
    """
    pass


@dataclass(frozen=True)
class SetScore:
    """
    Set the rating for a question.

    question_id names the question the rating was given for; None means
    the question under the cursor.
    Returns: StepView with the updated answer.
    """
    score: float
    question_id: Optional[str] = None


@dataclass(frozen=True)
class SetReflection:
    """
    Set the free-text reflection for a question.

    question_id as for SetScore.
    Returns: StepView with the updated answer.
    """
    reflection: str
    question_id: Optional[str] = None


@dataclass(frozen=True)
class UpdateAnswer:
    """
    Set score and/or reflection in one event.

    Fields left as None are preserved. question_id as for SetScore.
    Returns: StepView with the updated answer.
    """
    score: Optional[float] = None
    reflection: Optional[str] = None
    question_id: Optional[str] = None


@dataclass(frozen=True)
class NextQuestion:
    """Advance one question. No-op at the last question."""
    pass


@dataclass(frozen=True)
class PreviousQuestion:
    """Go back one question. No-op at the first question."""
    pass


@dataclass(frozen=True)
class FinishTest:
    """
    Complete the test and produce the result.

    Only valid from the last question.
    Returns: TestResult, or IllegalCommand elsewhere.
    """
    pass


# Command union type for type hints
Command = StartTest | SetScore | SetReflection | UpdateAnswer | NextQuestion | PreviousQuestion | FinishTest
