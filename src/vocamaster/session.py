from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from .exceptions import InvalidTransitionError
from .models import QuizResult, WordEntry


class Phase(str, Enum):
    PRESENTING = "presenting"
    REVEALED = "revealed"
    COMPLETE = "complete"


class SessionRunner(BaseModel):
    """
    Presents one word at a time and collects a self-graded judgment per word.

    Runners are immutable: every transition returns a new runner. The phases
    are Presenting(i) -> Revealed(i) -> Presenting(i+1) ... -> Complete.
    """

    model_config = ConfigDict(frozen=True)

    words: List[WordEntry]
    index: int = 0
    phase: Phase = Phase.PRESENTING
    results: List[QuizResult] = []

    @classmethod
    def start(cls, words: Sequence[WordEntry]) -> "SessionRunner":
        words = list(words)
        if not words:
            return cls(words=[], phase=Phase.COMPLETE)
        return cls(words=words)

    @property
    def total(self) -> int:
        return len(self.words)

    @property
    def is_complete(self) -> bool:
        return self.phase == Phase.COMPLETE

    @property
    def current_word(self) -> Optional[WordEntry]:
        if self.is_complete:
            return None
        return self.words[self.index]

    @property
    def progress_percent(self) -> int:
        if not self.total:
            return 100
        if self.is_complete:
            return 100
        return (self.index + 1) * 100 // self.total

    def reveal(self) -> "SessionRunner":
        if self.phase != Phase.PRESENTING:
            raise InvalidTransitionError(f"Cannot reveal while {self.phase.value}")
        return self.model_copy(update={"phase": Phase.REVEALED})

    def judge(self, is_correct: bool) -> "SessionRunner":
        if self.phase != Phase.REVEALED:
            raise InvalidTransitionError(f"Cannot judge while {self.phase.value}")
        results = self.results + [QuizResult(word=self.words[self.index], is_correct=is_correct)]
        if self.index + 1 < self.total:
            return self.model_copy(
                update={"index": self.index + 1, "phase": Phase.PRESENTING, "results": results}
            )
        return self.model_copy(update={"phase": Phase.COMPLETE, "results": results})
