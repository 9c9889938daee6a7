"""Quiz scoring."""

from typing import Optional, Sequence

from shelf_contracts import QuizQuestion, QuizResult


def score_quiz(questions: Sequence[QuizQuestion], answers: Sequence[Optional[int]]) -> QuizResult:
    """Count answers matching each question's ``correct_answer_index``.

    Unanswered questions (``None`` or missing from ``answers``) score zero.

    Example:
        >>> score_quiz(questions, [0, 2, None]).score
        1
    """
    score = sum(
        1
        for index, question in enumerate(questions)
        if index < len(answers) and answers[index] == question.correct_answer_index
    )
    return QuizResult(score=score, total=len(questions))
