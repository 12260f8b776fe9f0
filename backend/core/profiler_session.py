"""
Profiler Session - One respondent's pass through the questionnaire

Responsibilities:
- Own the Answer Store and Navigation Controller for one session
- Translate presentation commands into store/navigation calls
- On finish: score -> interpret -> render, and keep the result

Design principles:
- Explicit dependencies: every collaborator is passed in, nothing is
  looked up from a global registry
- Single owner: only this object mutates its Answer Store
- Lifecycle violations are returned as IllegalCommand, not raised
- No I/O: the rendered document is handed back to the caller, which
  owns persistence (and may retry it without recomputing)
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from backend.commands import (
    FinishTest,
    NextQuestion,
    PreviousQuestion,
    SetReflection,
    SetScore,
    StartTest,
    UpdateAnswer,
)
from backend.core.answer_store import AnswerStore
from backend.core.interpretation_mapper import interpret
from backend.core.navigation_controller import NavigationController
from backend.core.question_catalog import QuestionCatalog
from backend.results import IllegalCommand, StepView, TestResult
from backend.utils.helpers import generate_session_id

logger = logging.getLogger(__name__)

HandleResult = Union[StepView, TestResult, IllegalCommand]


class ProfilerSession:
    """
    Command handler for a single test session.

    Usage:
        session = ProfilerSession(catalog, scoring_engine, renderer, template)
        view = session.handle(StartTest())
        view = session.handle(SetScore(7))
        view = session.handle(NextQuestion())
        ...
        result = session.handle(FinishTest())
    """

    def __init__(self, catalog: QuestionCatalog, scoring_engine, renderer,
                 template: str, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            catalog: Question Catalog
            scoring_engine: Object with score(answers) -> dict
            renderer: Object with render(template, scores, answers, interpretations, now) -> str
            template: Result template text (from settings)
            clock: Zero-argument callable returning the current datetime

        Raises:
            TypeError: If a collaborator is missing its required method
        """
        self._validate_modules(scoring_engine, renderer)

        if not isinstance(template, str):
            raise TypeError(f"template must be str, got {type(template).__name__}")

        self.catalog = catalog
        self.scoring_engine = scoring_engine
        self.renderer = renderer
        self.template = template
        self.clock = clock or datetime.now
        self.session_id = generate_session_id()

        self.answer_store: Optional[AnswerStore] = None
        self.navigation: Optional[NavigationController] = None
        self.result: Optional[TestResult] = None

        logger.info(f"Profiler session created: {self.session_id}")

    @staticmethod
    def _validate_modules(scoring_engine, renderer):
        """Validate collaborator interfaces"""
        if not callable(getattr(scoring_engine, 'score', None)):
            raise TypeError("scoring_engine must have callable score() method")

        if not callable(getattr(renderer, 'render', None)):
            raise TypeError("renderer must have callable render() method")

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def is_started(self) -> bool:
        return self.navigation is not None

    @property
    def is_complete(self) -> bool:
        return self.result is not None

    def handle(self, command) -> HandleResult:
        """
        Process one presentation command.

        Args:
            command: One of the types in backend.commands

        Returns:
            StepView, TestResult, or IllegalCommand
        """
        command_type = type(command).__name__

        if isinstance(command, StartTest):
            return self._start()

        if not self.is_started:
            return self._illegal("Test has not been started", command_type)

        if self.is_complete:
            return self._illegal("Test is already complete", command_type)

        if isinstance(command, SetScore):
            return self._update(command_type, command.question_id, score=command.score)

        if isinstance(command, SetReflection):
            return self._update(command_type, command.question_id, reflection=command.reflection)

        if isinstance(command, UpdateAnswer):
            return self._update(
                command_type, command.question_id,
                score=command.score, reflection=command.reflection,
            )

        if isinstance(command, NextQuestion):
            self.navigation.next()
            return self.current_step()

        if isinstance(command, PreviousQuestion):
            self.navigation.previous()
            return self.current_step()

        if isinstance(command, FinishTest):
            if not self.navigation.finish():
                return self._illegal("Finish is only available on the last question", command_type)
            return self._complete()

        return self._illegal(f"Unknown command: {command_type}", command_type)

    def current_step(self) -> StepView:
        """View of the question under the cursor"""
        nav = self.navigation
        return StepView(
            question=nav.current_question,
            answer=nav.current_answer,
            index=nav.current_index,
            total=nav.question_count,
            can_go_back=not nav.is_first,
            can_finish=nav.is_last,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _start(self) -> HandleResult:
        if self.is_started:
            return self._illegal("Test already started", StartTest.__name__)

        self.answer_store = AnswerStore(self.catalog)
        self.navigation = NavigationController(self.catalog, self.answer_store)
        logger.info(f"Session {self.session_id} started ({len(self.catalog)} questions)")
        return self.current_step()

    def _update(self, command_type: str, question_id: Optional[str] = None,
                score=None, reflection=None) -> HandleResult:
        # An answer may only target a question the respondent has reached
        if question_id is None:
            question_id = self.navigation.current_question.id
        elif not isinstance(question_id, str) or question_id not in self.catalog:
            return self._illegal(f"Unknown question id: {question_id!r}", command_type)
        elif not self.answer_store.is_visited(question_id):
            return self._illegal(f"Question {question_id} has not been reached", command_type)

        try:
            self.answer_store.set(question_id, score=score, reflection=reflection)
        except (ValueError, TypeError) as e:
            return self._illegal(str(e), command_type)
        return self.current_step()

    def _complete(self) -> TestResult:
        answers = self.answer_store.all()
        scores = self.scoring_engine.score(answers)
        interpretations = interpret(scores)
        now = self.clock()

        document = self.renderer.render(
            self.template,
            scores,
            answers,
            interpretations=interpretations,
            now=now,
        )

        self.result = TestResult(
            session_id=self.session_id,
            scores=scores,
            interpretations=interpretations,
            document=document,
            completed_at=now,
        )
        logger.info(f"Session {self.session_id} complete")
        return self.result

    def _illegal(self, reason: str, command_type: str) -> IllegalCommand:
        logger.warning(f"Illegal command {command_type}: {reason}")
        return IllegalCommand(reason=reason, command_type=command_type)
