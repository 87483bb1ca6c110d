from typing import Any, Iterable, List, Tuple


def number_in_order(items: Iterable[Any]) -> List[Tuple[int, Any]]:
    """Pair each item with its 1-based position, ignoring any existing number."""
    return [(index + 1, item) for index, item in enumerate(items)]


def renumber(ordered_questions: Iterable[Any]) -> List[Tuple[Any, int]]:
    """Dense 1..N assignments for questions already sorted by their old number.

    Takes anything with ``id`` and ``question_number`` attributes and returns
    ``(question_id, new_number)`` only for the questions whose number changes.
    Pure: nothing is mutated.
    """
    assignments = []
    for new_number, question in number_in_order(ordered_questions):
        if question.question_number != new_number:
            assignments.append((question.id, new_number))
    return assignments
