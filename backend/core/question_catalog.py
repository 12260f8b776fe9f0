"""
Question Catalog - Static ordered list of profiler questions

Responsibilities:
- Load question definitions from JSON
- Validate the catalog once at load time
- Provide ordered, read-only access for the rest of the system

Design principles:
- Immutable: catalog is fixed at process start
- Fail fast: any malformed entry aborts initialization with a clear
  message, a question is never silently dropped
- Scale bounds are data, never assumed to be 0-10
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Tuple

from backend.contracts import Question, RatingScale

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONS_PATH = Path(__file__).resolve().parents[2] / "data" / "questions_en.json"

REQUIRED_QUESTION_KEYS = ("id", "text", "scale")
REQUIRED_SCALE_KEYS = ("min", "max", "min_label", "max_label")


class QuestionCatalog:
    """
    Ordered, validated collection of Questions.

    Total count and order are stable for the life of the process.
    """

    def __init__(self, questions: Iterable[Question]):
        """
        Initialize catalog from Question objects.

        Args:
            questions: Questions in presentation order

        Raises:
            ValueError: If ids are empty or duplicated, text is empty,
                        or a scale has min >= max
        """
        self._questions: Tuple[Question, ...] = tuple(questions)
        self._validate()
        self._by_id: Dict[str, Question] = {q.id: q for q in self._questions}
        self._index: Dict[str, int] = {q.id: i for i, q in enumerate(self._questions)}

        logger.info(f"Question Catalog loaded with {len(self._questions)} questions")

    @classmethod
    def from_file(cls, path=DEFAULT_QUESTIONS_PATH) -> "QuestionCatalog":
        """
        Load catalog from a questions JSON file.

        Expected structure:
            {"questions": [{"id": ..., "text": ..., "scale": {...}}, ...]}

        Args:
            path: Path to questions JSON

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If structure or any entry is invalid
        """
        catalog_path = Path(path)
        if not catalog_path.exists():
            raise FileNotFoundError(f"Question catalog not found: {path}")

        with open(catalog_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "QuestionCatalog":
        """
        Build catalog from parsed JSON data.

        Raises:
            ValueError: If structure or any entry is invalid
        """
        if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
            raise ValueError("Question catalog must be an object with a 'questions' list")

        questions = [cls._parse_question(i, raw) for i, raw in enumerate(data["questions"])]
        return cls(questions)

    @staticmethod
    def _parse_question(position: int, raw: dict) -> Question:
        if not isinstance(raw, dict):
            raise ValueError(f"questions[{position}] must be an object, got {type(raw).__name__}")

        missing = [key for key in REQUIRED_QUESTION_KEYS if key not in raw]
        if missing:
            raise ValueError(f"questions[{position}] missing required keys: {missing}")

        scale = raw["scale"]
        if not isinstance(scale, dict):
            raise ValueError(f"questions[{position}].scale must be an object")

        missing = [key for key in REQUIRED_SCALE_KEYS if key not in scale]
        if missing:
            raise ValueError(f"questions[{position}].scale missing required keys: {missing}")

        for bound in ("min", "max"):
            if isinstance(scale[bound], bool) or not isinstance(scale[bound], (int, float)):
                raise ValueError(f"questions[{position}].scale.{bound} must be a number")

        return Question(
            id=raw["id"],
            text=raw["text"],
            scale=RatingScale(
                min=scale["min"],
                max=scale["max"],
                min_label=scale["min_label"],
                max_label=scale["max_label"],
            ),
        )

    def _validate(self) -> None:
        """
        Validate catalog invariants.

        Raises:
            ValueError: On the first violated invariant
        """
        if not self._questions:
            raise ValueError("Question catalog is empty")

        seen = set()
        for position, question in enumerate(self._questions):
            if not isinstance(question.id, str) or not question.id.strip():
                raise ValueError(f"questions[{position}] has an empty id")

            if question.id in seen:
                raise ValueError(f"Duplicate question id in catalog: {question.id}")
            seen.add(question.id)

            if not isinstance(question.text, str) or not question.text.strip():
                raise ValueError(f"Question {question.id} has empty text")

            if not question.scale.min < question.scale.max:
                raise ValueError(
                    f"Question {question.id} has invalid scale: "
                    f"min ({question.scale.min}) must be less than max ({question.scale.max})"
                )

    # =========================================================================
    # Public API
    # =========================================================================

    def all(self) -> Tuple[Question, ...]:
        """All questions in presentation order"""
        return self._questions

    def get(self, question_id: str) -> Optional[Question]:
        """Question by id, or None if unknown"""
        return self._by_id.get(question_id)

    def ids(self) -> Tuple[str, ...]:
        return tuple(q.id for q in self._questions)

    def index_of(self, question_id: str) -> Optional[int]:
        return self._index.get(question_id)

    def require(self, question_ids: Iterable[str]) -> None:
        """
        Check that every id exists in the catalog.

        Used by components that reference questions by id (categories)
        to fail at startup rather than at scoring time.

        Raises:
            ValueError: Listing every unknown id
        """
        unknown = [qid for qid in question_ids if qid not in self._by_id]
        if unknown:
            raise ValueError(f"Unknown question ids referenced: {unknown}")

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __contains__(self, question_id) -> bool:
        return question_id in self._by_id
