"""
Shared pytest fixtures for the adaptive quiz tests.
"""

import pytest

from adaptive_quiz.models import Question
from adaptive_quiz.services.sequencer import SequenceDriver


def _question(qid: str, difficulty: str) -> Question:
    return Question(
        id=qid,
        text=f"Question {qid}?",
        choices=["wrong-a", "right", "wrong-b", "wrong-c"],
        answer="right",
        difficulty=difficulty,
        category="General Knowledge",
    )


@pytest.fixture
def make_question():
    """Factory: make_question("E1", "easy") -> Question whose answer is "right"."""
    return _question


@pytest.fixture
def make_pool():
    """Factory turning ids like "E1", "M2", "H1" into questions of the matching tier."""
    tiers = {"E": "easy", "M": "medium", "H": "hard"}

    def build(*ids):
        return [_question(qid, tiers[qid[0]]) for qid in ids]

    return build


@pytest.fixture
def canonical_pool(make_pool):
    return make_pool("E1", "E2", "M1", "M2", "H1")


@pytest.fixture
def run_session():
    """
    Drive a full session and return the emitted question ids.

    ``answers`` feeds ``advance``; once it runs out every further answer is
    taken as correct.
    """

    def run(questions, answers=()):
        driver = SequenceDriver(questions)
        feed = list(answers)
        emitted = []
        question = driver.start()
        while question is not None:
            emitted.append(question.id)
            question = driver.advance(feed.pop(0) if feed else True)
        return emitted

    return run
