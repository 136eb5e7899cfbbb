from typing import List, Protocol
from ..models import AttemptRecord, Question

class QuestionProvider(Protocol):
    def fetch_questions(self, category: str = "") -> List[Question]: ...

class SummarySink(Protocol):
    def add_score(self, username: str, score: int, total: int, category: str) -> AttemptRecord: ...
