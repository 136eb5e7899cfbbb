import pytest

from adaptive_quiz.errors import HintUnavailableError, ProtocolViolationError
from adaptive_quiz.models import Question, Tier
from adaptive_quiz.services.hints import fifty_fifty
from adaptive_quiz.services.quiz_session import QuizSession


def test_question_model_validates_choices():
    with pytest.raises(ValueError):
        Question(id="q", text="?", choices=["a", "b"], answer="c", difficulty="easy")
    with pytest.raises(ValueError):
        Question(id="q", text="?", choices=["a"], answer="a", difficulty="easy")


def test_question_is_correct_answer_uses_exact_equality(make_question):
    q = make_question("E1", "easy")
    assert q.is_correct_answer("right")
    assert not q.is_correct_answer("Right")
    assert q.display_info("Current Question") == "Current Question: Question E1? [easy]"


def test_question_choices_are_immutable(make_question):
    q = make_question("E1", "easy")
    assert isinstance(q.choices, tuple)
    with pytest.raises(AttributeError):
        q.choices.append("another")


def test_full_session_scores_and_finishes(canonical_pool):
    session = QuizSession(canonical_pool, username="ada")
    first = session.current_question()
    assert first.id == "E1"
    assert session.current_question() is first

    outcome = session.answer("right", question_id="E1")
    assert outcome.correct
    assert outcome.next_question.id == "M1"
    assert session.difficulty is Tier.MEDIUM

    session.current_question()
    outcome = session.answer("wrong-a")
    assert not outcome.correct
    assert outcome.correct_answer == "right"
    assert outcome.next_question.id == "E2"
    assert session.difficulty is Tier.EASY

    for _ in range(2):
        session.current_question()
        outcome = session.answer("right")
    assert not outcome.finished
    session.current_question()
    outcome = session.answer("right")
    assert outcome.finished
    assert session.is_finished
    assert outcome.summary.score == 4
    assert outcome.summary.incorrect_count == 1
    assert outcome.summary.total_questions == 5
    assert outcome.summary.percentage == 80
    assert session.current_question() is None


def test_answer_without_pending_question_raises(canonical_pool):
    session = QuizSession(canonical_pool)
    with pytest.raises(ProtocolViolationError):
        session.answer("right")


def test_answer_after_finish_raises(make_pool):
    session = QuizSession(make_pool("E1"))
    session.current_question()
    session.answer("right")
    with pytest.raises(ProtocolViolationError):
        session.answer("right")


def test_second_answer_without_fetching_next_question_raises(canonical_pool):
    session = QuizSession(canonical_pool)
    session.current_question()
    session.answer("right")
    with pytest.raises(ProtocolViolationError):
        session.answer("right")
    assert session.scorer.position == 1
    assert session.current_question().id == "M1"


def test_answer_for_other_question_raises(canonical_pool):
    session = QuizSession(canonical_pool)
    session.current_question()
    with pytest.raises(ProtocolViolationError):
        session.answer("right", question_id="M1")
    assert session.scorer.position == 0
    assert session.answer("right", question_id="E1").correct


def test_fifty_fifty_removes_first_two_wrong_choices(make_question):
    assert fifty_fifty(make_question("E1", "easy")) == ["wrong-a", "wrong-b"]


def test_hint_once_per_question_and_limited(make_pool):
    session = QuizSession(make_pool("E1", "E2", "E3", "E4"), hints=2)
    session.current_question()
    assert session.use_hint() == ["wrong-a", "wrong-b"]
    with pytest.raises(HintUnavailableError):
        session.use_hint()
    session.answer("right")
    session.current_question()
    session.use_hint()
    assert session.hints_remaining == 0
    session.answer("right")
    session.current_question()
    with pytest.raises(HintUnavailableError):
        session.use_hint()


def test_hint_before_start_raises(canonical_pool):
    session = QuizSession(canonical_pool)
    with pytest.raises(ProtocolViolationError):
        session.use_hint()
