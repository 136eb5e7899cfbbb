from typing import Dict, List, Optional
from .models import Question
from .services.quiz_session import QuizSession
from .config import settings

class SessionStore:
	def __init__(self) -> None:
		self.sessions: Dict[str, QuizSession] = {}

	def create_session(self, session_id: str, questions: List[Question], username: str, category: str = "") -> QuizSession:
		session = QuizSession(questions, username=username, category=category, hints=settings.hints_per_session)
		self.sessions[session_id] = session
		return session

	def has_session(self, session_id: str) -> bool:
		return session_id in self.sessions

	def get(self, session_id: str) -> Optional[QuizSession]:
		return self.sessions.get(session_id)

	def drop(self, session_id: str) -> None:
		self.sessions.pop(session_id, None)

session_store = SessionStore()
