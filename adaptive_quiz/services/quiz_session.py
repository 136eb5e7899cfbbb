import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from ..errors import HintUnavailableError, ProtocolViolationError
from ..models import Question, SessionSummary, Tier
from .hints import fifty_fifty
from .scorer import SessionScorer
from .sequencer import SequenceDriver

logger = logging.getLogger("adaptive_quiz")

@dataclass
class AnswerOutcome:
    correct: bool
    correct_answer: str
    score: int
    next_question: Optional[Question]
    summary: Optional[SessionSummary] = None

    @property
    def finished(self) -> bool:
        return self.next_question is None

class QuizSession:
    """One user's run through a pool: sequencing, scoring and hints together."""

    def __init__(self, questions: Sequence[Question], username: str = "", category: str = "", hints: int = 3) -> None:
        self.username = username
        self.category = category
        self.driver = SequenceDriver(questions)
        self.scorer = SessionScorer(self.driver.total)
        self.hints_remaining = hints
        self._current: Optional[Question] = None
        self._served = False
        self._hint_used_on_current = False
        self._started = False

    @property
    def total(self) -> int:
        return self.driver.total

    @property
    def difficulty(self) -> Tier:
        return self.driver.current_tier

    @property
    def is_finished(self) -> bool:
        return self.driver.is_exhausted

    def current_question(self) -> Optional[Question]:
        if not self._started:
            self._started = True
            self._current = self.driver.start()
            logger.debug({"event": "session_first_question", "username": self.username, "question": self._current.display_info("Current Question")})
        if self._current is not None:
            self._served = True
        return self._current

    def _served_question(self) -> Question:
        # only a question handed out by current_question() may be answered or hinted
        if self._current is None or not self._served:
            raise ProtocolViolationError("no question is waiting for an answer")
        return self._current

    def answer(self, choice: str, question_id: Optional[str] = None) -> AnswerOutcome:
        question = self._served_question()
        if question_id is not None and question_id != question.id:
            raise ProtocolViolationError(f"question {question_id} is not the one waiting for an answer")
        correct = self.scorer.record(question.is_correct_answer(choice))
        nxt = self.driver.advance(correct)
        self._current = nxt
        self._served = False
        self._hint_used_on_current = False
        summary = None
        if nxt is None:
            summary = self.scorer.summary()
            logger.debug({"event": "session_finished", "username": self.username, "score": summary.score, "total": summary.total_questions})
        return AnswerOutcome(correct=correct, correct_answer=question.answer, score=self.scorer.score, next_question=nxt, summary=summary)

    def use_hint(self) -> List[str]:
        question = self._served_question()
        if self.hints_remaining <= 0:
            raise HintUnavailableError("no hints remaining")
        if self._hint_used_on_current:
            raise HintUnavailableError("hint already used on this question")
        self.hints_remaining -= 1
        self._hint_used_on_current = True
        return fifty_fifty(question)

    def summary(self) -> SessionSummary:
        return self.scorer.summary()
