import logging
from collections import deque
from typing import Deque, Dict, Iterable, Optional
from ..errors import EmptyPoolError
from ..models import Question, Tier, TIER_ORDER

logger = logging.getLogger("adaptive_quiz")

class QuestionPool:
    """Questions split into one FIFO queue per tier, in arrival order."""

    def __init__(self, questions: Iterable[Question]) -> None:
        self._tiers: Dict[Tier, Deque[Question]] = {tier: deque() for tier in TIER_ORDER}
        self.size = 0
        for q in questions:
            self._tiers[Tier(q.difficulty)].append(q)
            self.size += 1
        if self.size == 0:
            raise EmptyPoolError("question pool is empty")
        logger.debug({"event": "pool_partitioned", **self.counts()})

    @classmethod
    def partition(cls, questions: Iterable[Question]) -> "QuestionPool":
        return cls(questions)

    def take_front(self, tier: Tier) -> Optional[Question]:
        queue = self._tiers[Tier(tier)]
        if queue:
            return queue.popleft()
        return None

    def has(self, tier: Tier) -> bool:
        return bool(self._tiers[Tier(tier)])

    def first_available(self, *tiers: Tier) -> Optional[Tier]:
        for tier in tiers:
            if self.has(tier):
                return Tier(tier)
        return None

    def is_exhausted(self) -> bool:
        return not any(self._tiers.values())

    def counts(self) -> Dict[str, int]:
        return {tier.value: len(queue) for tier, queue in self._tiers.items()}

    def __len__(self) -> int:
        return sum(len(queue) for queue in self._tiers.values())
