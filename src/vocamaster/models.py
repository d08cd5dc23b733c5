import time
import uuid
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QuizOrder(str, Enum):
    SEQUENTIAL = "sequential"
    RANDOM = "random"


class Stage(str, Enum):
    UPLOAD = "upload"
    SETTINGS = "settings"
    QUIZ = "quiz"
    RESULT = "result"


class WordEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    no: int
    word: str
    meaning: str


class MasteryRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    correct: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_correct_within_total(self):
        if self.correct > self.total:
            raise ValueError("correct cannot exceed total")
        return self


# Keyed by WordEntry.no. JSON stores the keys as strings; pydantic coerces
# them back to int on load.
MasteryLedger = Dict[int, MasteryRecord]


def _new_notebook_id() -> str:
    return str(uuid.uuid4())


def _now_millis() -> int:
    return int(time.time() * 1000)


class Notebook(BaseModel):
    id: str = Field(default_factory=_new_notebook_id)
    name: str
    words: List[WordEntry]
    mastery: MasteryLedger = Field(default_factory=dict)
    created_at: int = Field(default_factory=_now_millis)

    @property
    def max_no(self) -> int:
        return max((w.no for w in self.words), default=0)


class QuizSettings(BaseModel):
    range_start: int = 1
    range_end: int = 100
    question_count: int = 10
    order: QuizOrder = QuizOrder.RANDOM


class QuizResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: WordEntry
    is_correct: bool


class AiHint(BaseModel):
    example_sentence: str
    translation: str
    tips: str


class NotebookStats(BaseModel):
    word_count: int
    learned_count: int
    mastered_count: int
    total_attempts: int
    mastery_percent: int


class ResultSummary(BaseModel):
    correct_count: int
    total_count: int
    missed_count: int
    accuracy: int
