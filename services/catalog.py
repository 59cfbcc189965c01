# services/catalog.py - static question catalog loaded once at startup
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from pydantic import ValidationError

from services.errors import ConfigurationError
from services.schemas import Question

logger = logging.getLogger(__name__)


class QuestionCatalog:
    """Immutable, ordered set of questions with unique ids."""

    def __init__(self, questions: Iterable[Question]):
        ordered = tuple(questions)
        by_id: Dict[int, Question] = {}
        for q in ordered:
            if q.id in by_id:
                raise ConfigurationError(f"duplicate question id {q.id} in catalog")
            by_id[q.id] = q
        self._questions: Tuple[Question, ...] = ordered
        self._by_id = by_id

    @classmethod
    def from_records(cls, records) -> "QuestionCatalog":
        if not isinstance(records, list):
            raise ConfigurationError("question catalog must be a JSON array")
        try:
            return cls(Question.model_validate(r) for r in records)
        except ValidationError as e:
            raise ConfigurationError(f"invalid question record: {e}") from e

    @classmethod
    def load(cls, path) -> "QuestionCatalog":
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as fh:
                records = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"cannot read question catalog {path}: {e}") from e
        catalog = cls.from_records(records)
        logger.info("loaded %d questions from %s", len(catalog), path)
        return catalog

    def __len__(self):
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    def get(self, question_id: int) -> Optional[Question]:
        return self._by_id.get(question_id)

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions
