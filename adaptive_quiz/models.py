from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Dict, List, Optional, Tuple

class Tier(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

TIER_ORDER = (Tier.EASY, Tier.MEDIUM, Tier.HARD)

class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    choices: Tuple[str, ...] = Field(min_length=2)
    answer: str
    difficulty: Tier
    category: str = ""

    @model_validator(mode="after")
    def _answer_among_choices(self) -> "Question":
        if self.answer not in self.choices:
            raise ValueError("answer must be one of the choices")
        return self

    def is_correct_answer(self, choice: str) -> bool:
        return self.answer == choice

    def display_info(self, prefix: str) -> str:
        return f"{prefix}: {self.text} [{self.difficulty.value}]"

class PublicQuestion(BaseModel):
    id: str
    text: str
    choices: List[str]
    difficulty: Tier
    category: str

    @classmethod
    def from_question(cls, question: Question) -> "PublicQuestion":
        return cls(id=question.id, text=question.text, choices=list(question.choices), difficulty=question.difficulty, category=question.category)

class SessionSummary(BaseModel):
    score: int
    correct_count: int
    incorrect_count: int
    total_questions: int
    percentage: int
    message: str
    stats: Dict[str, float]

class AttemptRecord(BaseModel):
    username: str
    score: int
    total: int
    percentage: int
    category: str
    date: str
    timestamp: int

class StartSessionRequest(BaseModel):
    username: str
    category: str = ""

class StartSessionResponse(BaseModel):
    session_id: str
    total_questions: int
    pool: Dict[str, int]

class GetQuestionResponse(BaseModel):
    question: PublicQuestion
    position: int
    total: int
    score: int
    hints_remaining: int

class SubmitAnswerRequest(BaseModel):
    session_id: str
    question_id: str
    choice: str

class SubmitAnswerResponse(BaseModel):
    correct: bool
    correct_answer: str
    score: int
    difficulty: Tier
    finished: bool = False
    summary: Optional[SessionSummary] = None

class HintRequest(BaseModel):
    session_id: str

class HintResponse(BaseModel):
    eliminated: List[str]
    hints_remaining: int

class HistoryResponse(BaseModel):
    username: str
    attempts: List[AttemptRecord]
