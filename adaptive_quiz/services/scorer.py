from typing import Dict
from ..errors import ProtocolViolationError
from ..models import SessionSummary

ENCOURAGEMENTS = (
    (100, "Perfect score! You're a genius!"),
    (80, "Outstanding performance!"),
    (60, "Great job! You're doing awesome!"),
    (40, "Good effort! Keep practicing!"),
)
FALLBACK_ENCOURAGEMENT = "Every quiz makes you smarter! Try again!"

def encouragement_for(percentage: int) -> str:
    for threshold, message in ENCOURAGEMENTS:
        if percentage >= threshold:
            return message
    return FALLBACK_ENCOURAGEMENT

def calculate_stats(*values: int) -> Dict[str, float]:
    total = sum(values)
    return {"total": total, "average": total / len(values) if values else 0.0}

class SessionScorer:
    """Running totals for one session. Every answer scores 1 or 0, whatever its tier."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.score = 0
        self.correct_count = 0
        self.incorrect_count = 0
        self.position = 0

    @property
    def is_complete(self) -> bool:
        return self.position >= self.total

    def record(self, correct: bool) -> bool:
        if self.is_complete:
            raise ProtocolViolationError("all answers for this session are already recorded")
        if correct:
            self.correct_count += 1
            self.score += 1
        else:
            self.incorrect_count += 1
        self.position += 1
        return correct

    @property
    def percentage(self) -> int:
        if not self.total:
            return 0
        # halves round up
        return int(self.score * 100 / self.total + 0.5)

    def summary(self) -> SessionSummary:
        percentage = self.percentage
        return SessionSummary(
            score=self.score,
            correct_count=self.correct_count,
            incorrect_count=self.incorrect_count,
            total_questions=self.total,
            percentage=percentage,
            message=encouragement_for(percentage),
            stats=calculate_stats(self.correct_count, self.incorrect_count),
        )
