from typing import List
from ..models import Question

def fifty_fifty(question: Question) -> List[str]:
    """Return the two incorrect choices a 50/50 hint removes, in display order."""
    wrong = [c for c in question.choices if not question.is_correct_answer(c)]
    return wrong[:2]
