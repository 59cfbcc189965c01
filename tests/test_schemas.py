import pytest

from services.errors import BadRequest
from services.schemas import Question, parse_answers


def test_parse_answers_valid():
    answers = parse_answers([{"id": 1, "answer": "A"}, {"id": 2, "answer": "1984"}])
    assert [(a.id, a.answer) for a in answers] == [(1, "A"), (2, "1984")]


@pytest.mark.parametrize("payload", [None, []])
def test_parse_answers_empty(payload):
    with pytest.raises(BadRequest) as exc:
        parse_answers(payload)
    assert exc.value.message == "answers must not be empty"
    assert exc.value.status_code == 400


@pytest.mark.parametrize("payload", ["A", 3, {"id": 1, "answer": "A"}, True])
def test_parse_answers_not_a_list(payload):
    with pytest.raises(BadRequest) as exc:
        parse_answers(payload)
    assert exc.value.message == "answers must be an object"


@pytest.mark.parametrize(
    "payload",
    [
        [{"id": 1}],
        [{"answer": "A"}],
        [{"id": "1", "answer": "A"}],
        [{"id": 1, "answer": 1984}],
        ["A", "B", "C"],
    ],
)
def test_parse_answers_bad_items(payload):
    with pytest.raises(BadRequest) as exc:
        parse_answers(payload)
    assert "{id, answer}" in exc.value.message


def test_public_question_hides_answer_key():
    q = Question.model_validate(
        {"id": 1, "questionText": "Q1", "options": ["A", "B"], "correctAnswer": "A"}
    )
    dumped = q.public().model_dump(by_alias=True)
    assert dumped == {"id": 1, "questionText": "Q1", "options": ["A", "B"]}
