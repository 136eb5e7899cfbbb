class QuizError(Exception):
    """Base class for quiz engine errors."""


class EmptyPoolError(QuizError):
    """Raised when a session is built from (or started on) an empty question pool."""


class ProtocolViolationError(QuizError):
    """Raised when the start/advance alternation of a sequencer is broken by the caller."""


class PoolInvariantError(QuizError):
    """Raised when the pool has nothing for a tier the controller saw as non-empty."""


class HintUnavailableError(QuizError):
    pass


class QuestionFetchError(QuizError):
    pass
