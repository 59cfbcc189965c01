import logging
import random
import time
import uuid
from typing import Callable, List, MutableSequence, Optional, TypeVar

from services.catalog import QuestionCatalog
from services.errors import BadRequest, ConfigurationError, NotFound
from services.kv_store import KeyValueStore
from services.schemas import PublicQuestion, QuizSession, ScoreRecord, parse_answers

logger = logging.getLogger(__name__)

T = TypeVar("T")

SESSION_NS = "session"
SCORE_NS = "score"


def shuffle(items: MutableSequence[T], rng: Optional[random.Random] = None) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; j is drawn from [0, i] inclusive."""
    rng = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def select_question_ids(catalog: QuestionCatalog, count: int, rng: Optional[random.Random] = None) -> List[int]:
    if count > len(catalog):
        raise ConfigurationError(f"cannot pick {count} questions from a catalog of {len(catalog)}")
    pool = list(catalog.questions)
    return [q.id for q in shuffle(pool, rng)[:count]]


class QuizSessionService:
    """Session lifecycle: create, fetch questions, submit for a score, fetch score.

    Sessions live under ("session", uuid) with a TTL and are single use; the
    score is written under ("score", uuid) only after the session row has been
    claimed by a successful delete.
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: QuestionCatalog,
        questions_per_session: int = 3,
        session_ttl: int = 300,
        score_ttl: Optional[int] = None,
        enforce_answer_count: bool = True,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        if questions_per_session < 1:
            raise ConfigurationError("questions_per_session must be at least 1")
        if questions_per_session > len(catalog):
            raise ConfigurationError(
                f"catalog has {len(catalog)} questions, need at least {questions_per_session}"
            )
        self.store = store
        self.catalog = catalog
        self.questions_per_session = questions_per_session
        self.session_ttl = session_ttl
        self.score_ttl = score_ttl
        self.enforce_answer_count = enforce_answer_count
        self._rng = rng or random.Random()
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def _load_session(self, session_id: str) -> QuizSession:
        raw = self.store.get((SESSION_NS, session_id))
        if raw is None:
            logger.info("session miss id=%s", session_id)
            raise NotFound("session not found")
        return QuizSession.model_validate(raw)

    def create_session(self) -> QuizSession:
        session = QuizSession(
            uuid=str(uuid.uuid4()),
            selected_question_ids=select_question_ids(self.catalog, self.questions_per_session, self._rng),
            created_at=self._now(),
        )
        self.store.set(
            (SESSION_NS, session.uuid), session.model_dump(by_alias=True), expire_in=self.session_ttl
        )
        logger.info("session created id=%s ttl=%ss", session.uuid, self.session_ttl)
        return session

    def get_questions(self, session_id: str) -> List[PublicQuestion]:
        session = self._load_session(session_id)
        questions = []
        for qid in session.selected_question_ids:
            q = self.catalog.get(qid)
            if q is not None:
                questions.append(q.public())
        return questions

    def score_answers(self, session: QuizSession, answers) -> int:
        selected = set(session.selected_question_ids)
        seen = set()
        score = 0
        for a in answers:
            # First answer per question only; score stays within 0..questions_per_session
            # even when the answer count is not enforced
            if a.id not in selected or a.id in seen:
                continue
            seen.add(a.id)
            q = self.catalog.get(a.id)
            if q is not None and a.answer == q.correct_answer:
                score += 1
        return score

    def submit(self, session_id: str, payload) -> ScoreRecord:
        session = self._load_session(session_id)
        answers = parse_answers(payload)
        if self.enforce_answer_count and len(answers) != self.questions_per_session:
            raise BadRequest(f"you must answer {self.questions_per_session} questions")

        score = self.score_answers(session, answers)

        # Whoever removes the session row owns the score write
        if not self.store.delete((SESSION_NS, session_id)):
            logger.warning("session already consumed id=%s", session_id)
            raise NotFound("session not found")

        record = ScoreRecord(score=score, time=self._now())
        self.store.set((SCORE_NS, session_id), record.model_dump(), expire_in=self.score_ttl)
        logger.info("session scored id=%s score=%d/%d", session_id, score, self.questions_per_session)
        return record

    def get_score(self, session_id: str) -> ScoreRecord:
        raw = self.store.get((SCORE_NS, session_id))
        if raw is None:
            raise NotFound("score not found")
        return ScoreRecord.model_validate(raw)
