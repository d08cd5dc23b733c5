"""Folds quiz results into mastery ledgers and derives display statistics."""
import math
from typing import List, Sequence

from .models import (
    MasteryLedger,
    MasteryRecord,
    Notebook,
    NotebookStats,
    QuizResult,
    ResultSummary,
    WordEntry,
)


def percent(part: int, whole: int) -> int:
    """Rounded percentage, half-up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(100 * part / whole + 0.5))


def aggregate(ledger: MasteryLedger, results: Sequence[QuizResult]) -> MasteryLedger:
    """
    Returns a new ledger with every result counted once.

    Each result bumps ``total`` for its word number and ``correct`` when the
    answer was right; records are created on first attempt. The input
    ledger is left untouched.
    """
    updated = dict(ledger)
    for result in results:
        no = result.word.no
        record = updated.get(no, MasteryRecord())
        updated[no] = MasteryRecord(
            correct=record.correct + (1 if result.is_correct else 0),
            total=record.total + 1,
        )
    return updated


def accuracy(results: Sequence[QuizResult]) -> int:
    correct = sum(1 for r in results if r.is_correct)
    return percent(correct, len(results))


def result_summary(results: Sequence[QuizResult]) -> ResultSummary:
    correct = sum(1 for r in results if r.is_correct)
    total = len(results)
    return ResultSummary(
        correct_count=correct,
        total_count=total,
        missed_count=total - correct,
        accuracy=percent(correct, total),
    )


def missed_words(results: Sequence[QuizResult]) -> List[WordEntry]:
    return [r.word for r in results if not r.is_correct]


def notebook_stats(notebook: Notebook) -> NotebookStats:
    records = notebook.mastery.values()
    word_count = len(notebook.words)
    mastered = sum(1 for r in records if r.correct > 0)
    return NotebookStats(
        word_count=word_count,
        learned_count=sum(1 for r in records if r.total > 0),
        mastered_count=mastered,
        total_attempts=sum(r.total for r in records),
        mastery_percent=percent(mastered, word_count),
    )
