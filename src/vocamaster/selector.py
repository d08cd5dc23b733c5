import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .models import QuizOrder, QuizSettings, WordEntry

logger = logging.getLogger(__name__)

REVIEW_MODE = "review"


# --- Strategy Pattern: Quiz Generators ---
class QuizGenerator(ABC):
    """Abstract Base Class for different quiz selection strategies."""

    @abstractmethod
    def generate(self, words: Sequence[WordEntry], settings: QuizSettings) -> List[WordEntry]:
        pass

    def _in_range(self, words: Sequence[WordEntry], settings: QuizSettings) -> List[WordEntry]:
        return [w for w in words if settings.range_start <= w.no <= settings.range_end]

    def _limit(self, count: int, available: int) -> int:
        # A zero or negative count means zero questions.
        return max(0, min(count, available))


class SequentialQuizGenerator(QuizGenerator):
    """Takes the first N words of the range in ascending number order."""

    def generate(self, words: Sequence[WordEntry], settings: QuizSettings) -> List[WordEntry]:
        filtered = sorted(self._in_range(words, settings), key=lambda w: w.no)
        return filtered[: self._limit(settings.question_count, len(filtered))]


class RandomQuizGenerator(QuizGenerator):
    """Randomly selects N words from the range."""

    def generate(self, words: Sequence[WordEntry], settings: QuizSettings) -> List[WordEntry]:
        filtered = self._in_range(words, settings)
        return random.sample(filtered, self._limit(settings.question_count, len(filtered)))


class ReviewQuizGenerator(QuizGenerator):
    """Review mode: every given word, shuffled, with no range or count limit."""

    def generate(self, words: Sequence[WordEntry], settings: Optional[QuizSettings] = None) -> List[WordEntry]:
        return random.sample(list(words), len(words))


class QuizFactory:
    """Factory to select the appropriate generator."""

    @staticmethod
    def create(mode: str) -> QuizGenerator:
        if mode == QuizOrder.SEQUENTIAL.value:
            return SequentialQuizGenerator()
        if mode == QuizOrder.RANDOM.value:
            return RandomQuizGenerator()
        if mode == REVIEW_MODE:
            return ReviewQuizGenerator()
        raise ValueError(f"Unknown quiz mode: {mode}")


def select_words(words: Sequence[WordEntry], settings: QuizSettings) -> List[WordEntry]:
    """Returns the ordered list of words to present for ``settings``."""
    selection = QuizFactory.create(settings.order.value).generate(words, settings)
    logger.info(
        f"Selected {len(selection)} words "
        f"[range {settings.range_start}-{settings.range_end}, "
        f"count {settings.question_count}, order {settings.order.value}]"
    )
    return selection


def select_review(missed: Sequence[WordEntry]) -> List[WordEntry]:
    """Returns the missed words in a fresh random order."""
    return QuizFactory.create(REVIEW_MODE).generate(missed)
