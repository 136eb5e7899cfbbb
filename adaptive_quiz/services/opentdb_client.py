import html
import logging
import random
import uuid
from time import perf_counter
from typing import Any, Dict, List, Optional
import httpx
from ..config import settings
from ..errors import QuestionFetchError
from ..models import Question, Tier

logger = logging.getLogger("adaptive_quiz")

class OpenTDBClient:
    """Fetches multiple-choice questions from the Open Trivia Database."""

    def __init__(self, base_url: Optional[str] = None, amount: Optional[int] = None, timeout: Optional[float] = None, transport: Optional[httpx.BaseTransport] = None, rng: Optional[random.Random] = None) -> None:
        self.base_url = base_url or settings.opentdb_url
        self.amount = amount or settings.question_amount
        self.timeout = timeout or settings.request_timeout
        self.transport = transport
        self.rng = rng or random.Random()

    def _params(self, category: str) -> Dict[str, Any]:
        params: Dict[str, Any] = {"amount": self.amount, "type": "multiple"}
        if category:
            params["category"] = category
        return params

    def _decode(self, text: str) -> str:
        return html.unescape(text or "")

    def _shuffle_choices(self, choices: List[str]) -> List[str]:
        shuffled = choices.copy()
        self.rng.shuffle(shuffled)
        return shuffled

    def _parse_item(self, item: Dict[str, Any]) -> Question:
        correct = self._decode(item.get("correct_answer", ""))
        incorrect = [self._decode(a) for a in item.get("incorrect_answers", [])]
        return Question(
            id=str(uuid.uuid4()),
            text=self._decode(item.get("question", "")),
            choices=self._shuffle_choices(incorrect + [correct]),
            answer=correct,
            difficulty=Tier(item.get("difficulty", "easy")),
            category=self._decode(item.get("category", "")),
        )

    def fetch_questions(self, category: str = "") -> List[Question]:
        t0 = perf_counter()
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(self.base_url, params=self._params(category))
        except httpx.HTTPError as exc:
            logger.exception("opentdb_request_failed")
            raise QuestionFetchError(f"Could not fetch questions: {exc}") from exc
        latency_ms = int((perf_counter() - t0) * 1000)
        if not response.is_success:
            logger.warning({"event": "opentdb_http_error", "status_code": response.status_code, "latency_ms": latency_ms})
            raise QuestionFetchError(f"HTTP error! status: {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise QuestionFetchError("Could not parse question payload") from exc
        if data.get("response_code") != 0:
            logger.warning({"event": "opentdb_no_questions", "category": category, "response_code": data.get("response_code")})
            raise QuestionFetchError("No questions available for this category")
        try:
            questions = [self._parse_item(item) for item in data.get("results", [])]
        except ValueError as exc:
            raise QuestionFetchError(f"Malformed question in payload: {exc}") from exc
        logger.debug({"event": "opentdb_fetched", "category": category, "count": len(questions), "latency_ms": latency_ms})
        return questions
