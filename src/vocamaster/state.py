"""
Per-browser application state and the transitions between quiz stages.

Every transition takes the current ``AppState`` and returns a new one; the
web layer owns the only reference and swaps it after each user intent.
Transitions never touch persistence. When a transition finishes a quiz,
the returned state has ``stage == Stage.RESULT`` and ``pending_results``
set, and the caller is expected to record them and then call
``mark_recorded``.
"""
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from .exceptions import InvalidTransitionError
from .mastery import missed_words
from .models import AiHint, QuizResult, QuizSettings, Stage, WordEntry
from .selector import select_review, select_words
from .session import SessionRunner


class AppState(BaseModel):
    stage: Stage = Stage.UPLOAD
    active_notebook_id: Optional[str] = None
    settings: QuizSettings = Field(default_factory=QuizSettings)
    quiz_words: List[WordEntry] = []
    runner: Optional[SessionRunner] = None
    results: List[QuizResult] = []
    pending_results: bool = False
    hint: Optional[AiHint] = None
    hint_index: Optional[int] = None
    import_error: Optional[str] = None
    updated_at: datetime = Field(default_factory=datetime.now)


def _require_stage(state: AppState, *stages: Stage):
    if state.stage not in stages:
        allowed = ", ".join(s.value for s in stages)
        raise InvalidTransitionError(f"Expected stage {allowed}, got {state.stage.value}")


def _begin(state: AppState, words: Sequence[WordEntry]) -> AppState:
    runner = SessionRunner.start(words)
    update = {
        "quiz_words": list(words),
        "runner": runner,
        "results": [],
        "pending_results": False,
        "hint": None,
        "hint_index": None,
        "stage": Stage.QUIZ,
    }
    if runner.is_complete:
        # Nothing to ask: the session is over before it starts.
        update.update(runner=None, stage=Stage.RESULT, pending_results=True)
    return state.model_copy(update=update)


def import_failed(state: AppState, message: str) -> AppState:
    return state.model_copy(update={"stage": Stage.UPLOAD, "import_error": message})


def select_notebook(state: AppState, notebook_id: str) -> AppState:
    return state.model_copy(
        update={
            "stage": Stage.SETTINGS,
            "active_notebook_id": notebook_id,
            "runner": None,
            "results": [],
            "quiz_words": [],
            "import_error": None,
        }
    )


def back_to_library(state: AppState) -> AppState:
    return state.model_copy(
        update={
            "stage": Stage.UPLOAD,
            "active_notebook_id": None,
            "runner": None,
            "hint": None,
            "hint_index": None,
        }
    )


def start_quiz(state: AppState, words: Sequence[WordEntry], settings: QuizSettings) -> AppState:
    if state.active_notebook_id is None:
        raise InvalidTransitionError("No notebook is selected")
    state = state.model_copy(update={"settings": settings})
    return _begin(state, select_words(words, settings))


def reveal(state: AppState) -> AppState:
    _require_stage(state, Stage.QUIZ)
    return state.model_copy(update={"runner": state.runner.reveal()})


def judge(state: AppState, is_correct: bool) -> AppState:
    _require_stage(state, Stage.QUIZ)
    runner = state.runner.judge(is_correct)
    update = {"runner": runner, "hint": None, "hint_index": None}
    if runner.is_complete:
        update.update(
            runner=None,
            results=runner.results,
            pending_results=True,
            stage=Stage.RESULT,
        )
    return state.model_copy(update=update)


def mark_recorded(state: AppState) -> AppState:
    return state.model_copy(update={"pending_results": False})


def cancel(state: AppState) -> AppState:
    """Abandons the running quiz; its answers are discarded."""
    _require_stage(state, Stage.QUIZ)
    return state.model_copy(
        update={"stage": Stage.SETTINGS, "runner": None, "hint": None, "hint_index": None}
    )


def restart(state: AppState) -> AppState:
    """Runs the same quiz list again."""
    _require_stage(state, Stage.RESULT)
    return _begin(state, state.quiz_words)


def review_missed(state: AppState) -> AppState:
    _require_stage(state, Stage.RESULT)
    missed = missed_words(state.results)
    if not missed:
        return state
    return _begin(state, select_review(missed))


def go_to_settings(state: AppState) -> AppState:
    if state.active_notebook_id is None:
        raise InvalidTransitionError("No notebook is selected")
    return state.model_copy(update={"stage": Stage.SETTINGS, "runner": None})


def attach_hint(state: AppState, index: int, hint: AiHint) -> AppState:
    """Stores a hint for display if the quiz is still on question ``index``."""
    runner = state.runner
    if state.stage != Stage.QUIZ or runner is None or runner.index != index:
        return state
    return state.model_copy(update={"hint": hint, "hint_index": index})
