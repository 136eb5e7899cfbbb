import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple
from ..models import Tier
from .question_pool import QuestionPool

logger = logging.getLogger("adaptive_quiz")

EASY_PROMOTION_STREAK = 2
MEDIUM_PROMOTION_STREAK = 3

@dataclass(frozen=True)
class SequencerState:
    current_tier: Tier = Tier.EASY
    consecutive_correct: int = 0
    consecutive_medium_correct: int = 0

def seed_state(state: SequencerState, first_answer_correct: bool) -> SequencerState:
    return replace(state, consecutive_correct=1 if first_answer_correct else 0)

def select_next(state: SequencerState, last_answer_correct: Optional[bool], pool: QuestionPool) -> Tuple[Optional[Tier], SequencerState]:
    """Pick the tier of the next question and return it with the updated state.

    The pool is only inspected, never mutated. A ``None`` tier means every
    tier is empty. ``last_answer_correct=None`` is the no-signal case, reached
    only when the session could not open with an easy question.
    """
    if last_answer_correct is None:
        return pool.first_available(Tier.EASY, Tier.MEDIUM, Tier.HARD), state

    tier = state.current_tier
    if last_answer_correct:
        streak = state.consecutive_correct + 1
        medium_streak = state.consecutive_medium_correct + (1 if tier == Tier.MEDIUM else 0)
        state = replace(state, consecutive_correct=streak, consecutive_medium_correct=medium_streak)
        logger.debug({"event": "answer_correct", "streak": streak, "difficulty": tier.value, "medium_streak": medium_streak})

        if tier == Tier.EASY and streak >= EASY_PROMOTION_STREAK:
            if pool.has(Tier.MEDIUM):
                logger.debug({"event": "difficulty_promoted", "from": tier.value, "to": Tier.MEDIUM.value})
                return Tier.MEDIUM, replace(state, current_tier=Tier.MEDIUM, consecutive_medium_correct=0)
            return pool.first_available(Tier.EASY, Tier.HARD), state
        if tier == Tier.MEDIUM and medium_streak >= MEDIUM_PROMOTION_STREAK:
            if pool.has(Tier.HARD):
                logger.debug({"event": "difficulty_promoted", "from": tier.value, "to": Tier.HARD.value})
                return Tier.HARD, replace(state, current_tier=Tier.HARD)
            return pool.first_available(Tier.MEDIUM, Tier.EASY), state
        if pool.has(tier):
            return tier, state
        return pool.first_available(Tier.EASY, Tier.MEDIUM, Tier.HARD), state

    # streak broken, drop one level at most
    state = replace(state, consecutive_correct=0)
    if tier == Tier.HARD:
        state = replace(state, current_tier=Tier.MEDIUM, consecutive_medium_correct=0)
        order = (Tier.MEDIUM, Tier.EASY, Tier.HARD)
    elif tier == Tier.MEDIUM:
        state = replace(state, current_tier=Tier.EASY, consecutive_medium_correct=0)
        order = (Tier.EASY, Tier.MEDIUM, Tier.HARD)
    else:
        order = (Tier.EASY, Tier.MEDIUM, Tier.HARD)
    logger.debug({"event": "answer_wrong", "from": tier.value, "to": state.current_tier.value})
    return pool.first_available(*order), state

class DifficultyController:
    """Owns the sequencer state and applies the opening move before the main policy."""

    def __init__(self) -> None:
        self.state = SequencerState()
        self._awaiting_seed = False

    def opening_tier(self, pool: QuestionPool) -> Optional[Tier]:
        if pool.has(Tier.EASY):
            self._awaiting_seed = True
            logger.debug({"event": "opening_move", "difficulty": Tier.EASY.value})
            return Tier.EASY
        return None

    def next_tier(self, last_answer_correct: Optional[bool], pool: QuestionPool) -> Optional[Tier]:
        if self._awaiting_seed:
            # the seeding answer also drives the first policy step
            self.state = seed_state(self.state, bool(last_answer_correct))
            self._awaiting_seed = False
        tier, self.state = select_next(self.state, last_answer_correct, pool)
        return tier
