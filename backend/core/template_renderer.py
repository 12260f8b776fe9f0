"""
Template Renderer - Token substitution for the result document

Responsibilities:
- Replace {{date}}, {{score_<KEY>}} and {{interpretations}} in a
  user-supplied template
- Append the question/answer/reflection transcript

Token semantics:
- Literal, case-sensitive match
- Only the first occurrence of each token is replaced
- Replacement text is never rescanned for tokens
- Unknown tokens (including {{score_X}} for a key absent from the
  scores) are left verbatim so the user can see them

Design principles:
- Pure function of (template, scores, answers, clock): no I/O
- Deterministic assembly, same inputs produce the same document
"""

import logging
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple

from backend.contracts import Answer
from backend.core.interpretation_mapper import Interpretation, interpret
from backend.core.question_catalog import QuestionCatalog
from backend.utils.categories import Category
from backend.utils.helpers import format_timestamp

logger = logging.getLogger(__name__)

DATE_TOKEN = "{{date}}"
INTERPRETATIONS_TOKEN = "{{interpretations}}"
SCORE_TOKEN = "{{score_%s}}"

TRANSCRIPT_HEADING = "## Questions and Answers"
NOT_ANSWERED = "Not answered"


class TemplateRenderer:
    """Renders the result document from a template"""

    def __init__(self, catalog: QuestionCatalog):
        """
        Args:
            catalog: Question Catalog, defines transcript order and prompts
        """
        self.catalog = catalog

    # ==================== PUBLIC API ====================

    def render(
        self,
        template: str,
        scores: Mapping[Category, float],
        answers: Mapping[str, Answer],
        interpretations: Optional[Mapping[Category, Interpretation]] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Render the complete result document.

        Args:
            template: Template text containing tokens
            scores: Output of ScoringEngine.score()
            answers: Output of AnswerStore.all()
            interpretations: Output of interpret(scores); computed if omitted
            now: Clock reading for {{date}}; datetime.now() if omitted

        Returns:
            str: Substituted template followed by the transcript

        Raises:
            TypeError: If template is not a string
        """
        if not isinstance(template, str):
            raise TypeError(f"template must be str, got {type(template).__name__}")

        if interpretations is None:
            interpretations = interpret(scores)
        if now is None:
            now = datetime.now()

        body = self.substitute(template, self._replacements(scores, interpretations, now))
        transcript = self.format_transcript(answers)

        document = f"{body.rstrip()}\n\n{transcript}"
        logger.info(f"Result document rendered ({len(document)} characters)")
        return document

    @staticmethod
    def substitute(template: str, replacements: Mapping[str, str]) -> str:
        """
        Replace the first occurrence of each token in a single pass.

        All positions are located in the original template before any
        text is spliced in, so tokens appearing inside replacement text
        stay untouched.

        Args:
            template: Source text
            replacements: Literal token -> replacement text

        Returns:
            str: Template with tokens replaced
        """
        spans: List[Tuple[int, int, str]] = []
        for token, value in replacements.items():
            start = template.find(token)
            if start != -1:
                spans.append((start, start + len(token), value))

        spans.sort()
        parts = []
        cursor = 0
        for start, end, value in spans:
            if start < cursor:
                continue
            parts.append(template[cursor:start])
            parts.append(value)
            cursor = end
        parts.append(template[cursor:])
        return "".join(parts)

    @staticmethod
    def format_interpretations(interpretations: Mapping[Category, Interpretation]) -> str:
        """
        Markdown table with one row per interpretation, in mapping order.

        Example:
            | Category | Score | Interpretation |
            |----------|-------|----------------|
            | Positive Emotion | 6.00 | You experience positive emotions ... |
        """
        lines = [
            "| Category | Score | Interpretation |",
            "|----------|-------|----------------|",
        ]
        for item in interpretations.values():
            lines.append(f"| {item.name} | {item.score:.2f} | {item.text} |")
        return "\n".join(lines)

    def format_transcript(self, answers: Mapping[str, Answer]) -> str:
        """
        Question/answer transcript in catalog order.

        Each question gets a Score line ('Not answered' if never
        visited) and a Reflection line only when the reflection is
        non-empty.
        A reflection spanning several lines keeps its continuation
        lines indented under the list item.
        """
        lines = [TRANSCRIPT_HEADING]
        for number, question in enumerate(self.catalog.all(), 1):
            answer = answers.get(question.id)
            lines.append("")
            lines.append(f"### {number}. {question.text}")
            lines.append("")
            if answer is None:
                lines.append(f"- Score: {NOT_ANSWERED}")
            else:
                lines.append(f"- Score: {_format_answer_score(answer.score)}")
                if answer.reflection.strip():
                    lines.extend(_reflection_lines(answer.reflection))
        return "\n".join(lines) + "\n"

    # ==================== HELPERS ====================

    def _replacements(self, scores, interpretations, now) -> Dict[str, str]:
        replacements = {DATE_TOKEN: format_timestamp(now)}
        for category, score in scores.items():
            key = category.value if isinstance(category, Category) else str(category)
            replacements[SCORE_TOKEN % key] = f"{score:.2f}"
        replacements[INTERPRETATIONS_TOKEN] = self.format_interpretations(interpretations)
        return replacements


def _format_answer_score(score: float) -> str:
    if float(score).is_integer():
        return str(int(score))
    return f"{score:g}"


def _reflection_lines(reflection: str) -> List[str]:
    first, *rest = reflection.strip().splitlines()
    lines = [f"- Reflection: {first}"]
    for line in rest:
        lines.append(f"  {line}" if line.strip() else "")
    return lines
