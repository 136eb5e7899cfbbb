from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import uuid
from time import perf_counter
from datetime import datetime, timezone
from .state import session_store
from .models import (
	StartSessionRequest,
	StartSessionResponse,
	GetQuestionResponse,
	PublicQuestion,
	SubmitAnswerRequest,
	SubmitAnswerResponse,
	HintRequest,
	HintResponse,
	HistoryResponse,
	SessionSummary,
)
from .errors import EmptyPoolError, HintUnavailableError, ProtocolViolationError, QuestionFetchError
from .services.opentdb_client import OpenTDBClient
from .services.history_store import ScoreHistoryStore
from .services.quiz_session import QuizSession
from .services.protocols import QuestionProvider, SummarySink
from .config import settings

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("adaptive_quiz")

app = FastAPI(default_response_class=ORJSONResponse)

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

question_source: QuestionProvider = OpenTDBClient()
history_store = ScoreHistoryStore()

def _require_session(session_id: str) -> QuizSession:
	session = session_store.get(session_id)
	if session is None:
		raise HTTPException(status_code=404, detail="session_not_found")
	return session

def _record_finished(session: QuizSession, summary: SessionSummary, sink: SummarySink) -> None:
	try:
		sink.add_score(session.username, summary.score, summary.total_questions, session.category or "Mixed")
	except (OSError, ValueError):
		logger.exception("history_save_failed")

@app.on_event("startup")
def on_startup() -> None:
	logger.info({
		"event": "api_startup",
		"utc_time": datetime.now(timezone.utc).isoformat(),
		"source": settings.opentdb_url,
		"question_amount": settings.question_amount,
		"hints_per_session": settings.hints_per_session,
	})

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
	start = perf_counter()
	response = await call_next(request)
	duration_ms = int((perf_counter() - start) * 1000)
	logger.debug({
		"event": "request_timing",
		"method": request.method,
		"path": request.url.path,
		"status_code": response.status_code,
		"duration_ms": duration_ms,
	})
	return response

@app.post("/api/session/start", response_model=StartSessionResponse)
def start_session(payload: StartSessionRequest):
	username = payload.username.strip()
	if not username:
		raise HTTPException(status_code=422, detail="username_required")
	try:
		gen_start = perf_counter()
		questions = question_source.fetch_questions(payload.category)
	except QuestionFetchError as e:
		logger.warning({"event": "question_fetch_failed", "category": payload.category, "error": str(e)})
		raise HTTPException(status_code=502, detail=str(e))
	session_id = str(uuid.uuid4())
	try:
		session = session_store.create_session(session_id, questions, username, payload.category)
	except EmptyPoolError:
		logger.warning({"event": "empty_pool", "category": payload.category})
		raise HTTPException(status_code=503, detail="no_questions_available")
	logger.debug({
		"event": "session_started",
		"session_id": session_id,
		"username": username,
		"count": session.total,
		"duration_ms": int((perf_counter() - gen_start) * 1000),
	})
	return StartSessionResponse(session_id=session_id, total_questions=session.total, pool=session.driver.pool.counts())

@app.get("/api/quiz/next", response_model=GetQuestionResponse)
def get_next_question(session_id: str):
	session = _require_session(session_id)
	question = session.current_question()
	if question is None:
		raise HTTPException(status_code=409, detail="session_complete")
	logger.debug({
		"event": "serve_question",
		"session_id": session_id,
		"question_id": question.id,
		"difficulty": question.difficulty.value,
		"text": question.text,
	})
	return GetQuestionResponse(
		question=PublicQuestion.from_question(question),
		position=session.scorer.position + 1,
		total=session.total,
		score=session.scorer.score,
		hints_remaining=session.hints_remaining,
	)

@app.post("/api/quiz/submit", response_model=SubmitAnswerResponse)
def submit_answer(payload: SubmitAnswerRequest):
	session = _require_session(payload.session_id)
	try:
		outcome = session.answer(payload.choice, question_id=payload.question_id)
	except ProtocolViolationError:
		logger.debug({"event": "submit_rejected", "session_id": payload.session_id, "question_id": payload.question_id})
		raise HTTPException(status_code=409, detail="no_pending_question")
	logger.debug({
		"event": "submit_answer",
		"session_id": payload.session_id,
		"question_id": payload.question_id,
		"is_correct": outcome.correct,
		"selected": payload.choice,
		"correct_text": outcome.correct_answer,
		"score": outcome.score,
		"difficulty": session.difficulty.value,
	})
	if outcome.finished:
		_record_finished(session, outcome.summary, history_store)
	return SubmitAnswerResponse(
		correct=outcome.correct,
		correct_answer=outcome.correct_answer,
		score=outcome.score,
		difficulty=session.difficulty,
		finished=outcome.finished,
		summary=outcome.summary,
	)

@app.post("/api/quiz/hint", response_model=HintResponse)
def use_hint(payload: HintRequest):
	session = _require_session(payload.session_id)
	try:
		eliminated = session.use_hint()
	except HintUnavailableError as e:
		raise HTTPException(status_code=409, detail=str(e).replace(" ", "_"))
	except ProtocolViolationError:
		raise HTTPException(status_code=409, detail="no_pending_question")
	logger.debug({"event": "hint_used", "session_id": payload.session_id, "hints_remaining": session.hints_remaining})
	return HintResponse(eliminated=eliminated, hints_remaining=session.hints_remaining)

@app.get("/api/quiz/summary", response_model=SessionSummary)
def get_summary(session_id: str):
	return _require_session(session_id).summary()

@app.delete("/api/session/{session_id}", status_code=204)
def end_session(session_id: str):
	_require_session(session_id)
	session_store.drop(session_id)
	logger.debug({"event": "session_dropped", "session_id": session_id})
	return Response(status_code=204)

@app.get("/api/history/{username}", response_model=HistoryResponse)
def get_history(username: str):
	try:
		attempts = history_store.get_history(username)
	except ValueError:
		raise HTTPException(status_code=422, detail="username_required")
	return HistoryResponse(username=username, attempts=attempts)
