from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from services.errors import BadRequest

# ------------------------------------------------------------
# Catalog models
# ------------------------------------------------------------
class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    question_text: str = Field(alias="questionText")
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")

    def public(self) -> "PublicQuestion":
        return PublicQuestion(id=self.id, question_text=self.question_text, options=list(self.options))


class PublicQuestion(BaseModel):
    """Question as shown to the client: no answer key."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    question_text: str = Field(alias="questionText")
    options: List[str]


# ------------------------------------------------------------
# Stored records
# ------------------------------------------------------------
class QuizSession(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uuid: str
    selected_question_ids: List[int] = Field(alias="selectedQuestionIds")
    created_at: int = Field(alias="createdAt")


class ScoreRecord(BaseModel):
    score: int
    time: int


# ------------------------------------------------------------
# Request models
# ------------------------------------------------------------
class Answer(BaseModel):
    id: StrictInt
    answer: StrictStr


_ANSWER_LIST = TypeAdapter(List[Answer])


def parse_answers(payload: Optional[object]) -> List[Answer]:
    """Validate a decoded JSON submission into a list of Answer or raise BadRequest.

    null / missing body and [] are "empty"; any non-list is "must be an object"
    (the messages are kept as-is for existing clients).
    """
    if payload is None:
        raise BadRequest("answers must not be empty")
    if not isinstance(payload, list):
        raise BadRequest("answers must be an object")
    if not payload:
        raise BadRequest("answers must not be empty")
    try:
        return _ANSWER_LIST.validate_python(payload)
    except ValidationError:
        raise BadRequest("answers must be a list of {id, answer} objects")
