import logging
from typing import Iterable, Optional
from ..errors import EmptyPoolError, PoolInvariantError, ProtocolViolationError
from ..models import Question, Tier
from .adaptive_engine import DifficultyController, SequencerState
from .question_pool import QuestionPool

logger = logging.getLogger("adaptive_quiz")

READY = "ready"
PENDING = "pending"
EXHAUSTED = "exhausted"

class SequenceDriver:
    """Hands out one question per request and waits for its correctness before the next.

    Usage::

        driver = SequenceDriver(questions)
        question = driver.start()
        while question is not None:
            question = driver.advance(ask(question))

    ``advance`` returns ``None`` once the pool is exhausted. The driver cannot
    be rewound; build a new one to replay a session. Not thread-safe.
    """

    def __init__(self, questions: Iterable[Question]) -> None:
        self.pool = QuestionPool.partition(questions)
        self.total = self.pool.size
        self.controller = DifficultyController()
        self.emitted = 0
        self._phase = READY

    @property
    def state(self) -> SequencerState:
        return self.controller.state

    @property
    def current_tier(self) -> Tier:
        return self.controller.state.current_tier

    @property
    def pending(self) -> bool:
        return self._phase == PENDING

    @property
    def is_exhausted(self) -> bool:
        return self._phase == EXHAUSTED

    def start(self) -> Question:
        if self._phase != READY:
            raise ProtocolViolationError(f"start() called while {self._phase}")
        if self.pool.is_exhausted():
            raise EmptyPoolError("question pool is empty")
        tier = self.controller.opening_tier(self.pool)
        if tier is None:
            tier = self.controller.next_tier(None, self.pool)
        return self._produce(tier)

    def advance(self, last_answer_correct: bool) -> Optional[Question]:
        if self._phase != PENDING:
            raise ProtocolViolationError(f"advance() called while {self._phase}")
        tier = self.controller.next_tier(bool(last_answer_correct), self.pool)
        return self._produce(tier)

    def _produce(self, tier: Optional[Tier]) -> Optional[Question]:
        if tier is None:
            self._phase = EXHAUSTED
            logger.debug({"event": "pool_exhausted", "emitted": self.emitted})
            return None
        question = self.pool.take_front(tier)
        if question is None:
            raise PoolInvariantError(f"no {tier.value} question left although one was expected")
        self.emitted += 1
        self._phase = PENDING
        logger.debug({"event": "next_question", "difficulty": tier.value, "question_id": question.id, "remaining": len(self.pool)})
        return question
