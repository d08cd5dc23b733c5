import logging
import uuid
from typing import Optional, Tuple

from fastapi import APIRouter, Cookie, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from . import state as transitions
from .config import settings
from .exceptions import (
    InvalidTransitionError,
    NotebookNotFoundError,
    WordListImportError,
)
from .globals import (
    get_active_session,
    hint_provider,
    notebook_library,
    store_session,
    templates,
)
from .importer import import_word_list, parse_number
from .mastery import notebook_stats, result_summary
from .models import Notebook, QuizOrder, QuizSettings, Stage
from .session import Phase
from .state import AppState

logger = logging.getLogger(__name__)

router = APIRouter()

STAGE_URLS = {
    Stage.UPLOAD: "/",
    Stage.SETTINGS: "/settings",
    Stage.QUIZ: "/quiz",
    Stage.RESULT: "/result",
}


# --- Dependencies ---
def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME)
) -> Optional[str]:
    return session_id


def load_session(session_id: Optional[str]) -> Tuple[str, AppState]:
    """Returns the caller's state, starting a fresh one when missing or expired."""
    state = get_active_session(session_id)
    if state is None:
        session_id = str(uuid.uuid4())
        state = AppState()
        store_session(session_id, state)
        logger.info(f"New session: {session_id}")
    return session_id, state


# --- Helpers ---
def _with_cookie(response, session_id: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        httponly=True,
        samesite="Lax",
    )
    return response


def _redirect(url: str, session_id: str) -> RedirectResponse:
    return _with_cookie(RedirectResponse(url=url, status_code=302), session_id)


def _stage_url(state: AppState) -> str:
    return STAGE_URLS[state.stage]


def _record_if_complete(session_id: str, state: AppState) -> AppState:
    if not state.pending_results:
        return state
    try:
        notebook_library.record_results(state.active_notebook_id, state.results)
        logger.info(
            f"Session {session_id}: recorded {len(state.results)} results "
            f"for notebook {state.active_notebook_id}"
        )
    except NotebookNotFoundError as e:
        logger.warning(f"Session {session_id}: results not recorded: {e}")
    return transitions.mark_recorded(state)


def _transition(session_id: str, state: AppState, transition, *args) -> RedirectResponse:
    """Applies a state transition and redirects to the page for the new stage."""
    try:
        new_state = transition(state, *args)
    except InvalidTransitionError as e:
        logger.warning(f"Session {session_id}: {e}")
        return _redirect(_stage_url(state), session_id)
    new_state = _record_if_complete(session_id, new_state)
    store_session(session_id, new_state)
    return _redirect(_stage_url(new_state), session_id)


def _active_notebook(state: AppState) -> Optional[Notebook]:
    if state.active_notebook_id is None:
        return None
    try:
        return notebook_library.get(state.active_notebook_id)
    except NotebookNotFoundError:
        return None


def parse_quiz_form(
    notebook: Notebook, range_start: str, range_end: str, question_count: str, order: str
) -> QuizSettings:
    """Builds quiz settings from raw form fields, filling in blanks."""

    def number(text: str, default: int) -> int:
        value = parse_number(text or "")
        return default if value is None else value

    try:
        quiz_order = QuizOrder(order)
    except ValueError:
        quiz_order = QuizOrder.RANDOM
    return QuizSettings(
        range_start=number(range_start, 1),
        range_end=number(range_end, notebook.max_no),
        question_count=number(question_count, settings.DEFAULT_QUESTION_COUNT),
        order=quiz_order,
    )


# --- Library ---
@router.get("/", response_class=HTMLResponse)
async def library_page(request: Request, session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    if state.import_error:
        store_session(session_id, state.model_copy(update={"import_error": None}))
    notebooks = [(nb, notebook_stats(nb)) for nb in notebook_library.list_notebooks()]
    response = templates.TemplateResponse(
        request,
        "library.html",
        {"notebooks": notebooks, "error": state.import_error},
    )
    return _with_cookie(response, session_id)


@router.post("/notebooks/import")
async def import_notebook(
    file: UploadFile = File(...), session_id: str = Depends(get_session_id)
):
    session_id, state = load_session(session_id)
    try:
        if file.size is not None and file.size > settings.MAX_UPLOAD_BYTES:
            raise WordListImportError("The file is too large.")
        content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
        if len(content) > settings.MAX_UPLOAD_BYTES:
            raise WordListImportError("The file is too large.")
        words = import_word_list(content, file.filename)
    except WordListImportError as e:
        logger.warning(f"Session {session_id}: import of {file.filename} failed: {e}")
        store_session(session_id, transitions.import_failed(state, str(e)))
        return _redirect("/", session_id)

    notebook = notebook_library.create(words)
    return _transition(session_id, state, transitions.select_notebook, notebook.id)


@router.post("/notebooks/{notebook_id}/rename")
async def rename_notebook(
    notebook_id: str, name: str = Form(""), session_id: str = Depends(get_session_id)
):
    session_id, _ = load_session(session_id)
    try:
        notebook_library.rename(notebook_id, name)
    except NotebookNotFoundError as e:
        logger.warning(str(e))
    return _redirect("/", session_id)


@router.post("/notebooks/{notebook_id}/delete")
async def delete_notebook(notebook_id: str, session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    try:
        notebook_library.delete(notebook_id)
    except NotebookNotFoundError as e:
        logger.warning(str(e))
    if state.active_notebook_id == notebook_id:
        store_session(session_id, transitions.back_to_library(state))
    return _redirect("/", session_id)


@router.post("/notebooks/{notebook_id}/select")
async def select_notebook(notebook_id: str, session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    try:
        notebook_library.get(notebook_id)
    except NotebookNotFoundError as e:
        logger.warning(str(e))
        return _redirect("/", session_id)
    return _transition(session_id, state, transitions.select_notebook, notebook_id)


@router.post("/library")
async def back_to_library(session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    return _transition(session_id, state, transitions.back_to_library)


# --- Settings ---
@router.get("/settings", response_class=HTMLResponse)
async def settings_page(request: Request, session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    notebook = _active_notebook(state)
    if notebook is None:
        return _redirect("/", session_id)
    response = templates.TemplateResponse(
        request,
        "settings.html",
        {
            "notebook": notebook,
            "word_count": len(notebook.words),
            "max_no": notebook.max_no,
            "quick_counts": settings.QUICK_COUNTS,
            "last_order": state.settings.order.value,
        },
    )
    return _with_cookie(response, session_id)


@router.post("/result/settings")
async def change_settings(session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    return _transition(session_id, state, transitions.go_to_settings)


# --- Quiz ---
@router.post("/quiz/start")
async def start_quiz(
    range_start: str = Form(""),
    range_end: str = Form(""),
    question_count: str = Form(""),
    order: str = Form(QuizOrder.RANDOM.value),
    session_id: str = Depends(get_session_id),
):
    session_id, state = load_session(session_id)
    notebook = _active_notebook(state)
    if notebook is None:
        return _redirect("/", session_id)
    quiz_settings = parse_quiz_form(notebook, range_start, range_end, question_count, order)
    return _transition(session_id, state, transitions.start_quiz, notebook.words, quiz_settings)


@router.get("/quiz", response_class=HTMLResponse)
async def quiz_page(request: Request, session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    if state.stage != Stage.QUIZ:
        return _redirect(_stage_url(state), session_id)
    runner = state.runner
    response = templates.TemplateResponse(
        request,
        "quiz.html",
        {
            "word": runner.current_word,
            "index": runner.index,
            "total": runner.total,
            "progress": runner.progress_percent,
            "revealed": runner.phase == Phase.REVEALED,
            "hint": state.hint,
        },
    )
    return _with_cookie(response, session_id)


@router.post("/quiz/reveal")
async def reveal_meaning(session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    return _transition(session_id, state, transitions.reveal)


@router.post("/quiz/judge")
async def judge_answer(
    is_correct: bool = Form(...), session_id: str = Depends(get_session_id)
):
    session_id, state = load_session(session_id)
    return _transition(session_id, state, transitions.judge, is_correct)


@router.post("/quiz/cancel")
async def cancel_quiz(session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    return _transition(session_id, state, transitions.cancel)


@router.post("/api/quiz/hint")
async def request_hint(session_id: str = Depends(get_session_id)):
    state = get_active_session(session_id)
    if state is None:
        return JSONResponse({"error": "Session invalid"}, status_code=401)
    if state.stage != Stage.QUIZ:
        return JSONResponse({"error": "No quiz in progress"}, status_code=409)

    index = state.runner.index
    word = state.runner.current_word
    hint = await run_in_threadpool(hint_provider.get_hint, word.word, word.meaning)

    # No await from here on: the read and the write see the same state.
    latest = get_active_session(session_id)
    if latest is not None:
        updated = transitions.attach_hint(latest, index, hint)
        if updated is not latest:
            store_session(session_id, updated)
    return {"index": index, **hint.model_dump()}


# --- Result ---
@router.get("/result", response_class=HTMLResponse)
async def result_page(request: Request, session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    if state.stage != Stage.RESULT:
        return _redirect(_stage_url(state), session_id)
    response = templates.TemplateResponse(
        request,
        "result.html",
        {
            "summary": result_summary(state.results),
            "results": state.results,
        },
    )
    return _with_cookie(response, session_id)


@router.post("/result/restart")
async def restart_quiz(session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    return _transition(session_id, state, transitions.restart)


@router.post("/result/review")
async def review_missed(session_id: str = Depends(get_session_id)):
    session_id, state = load_session(session_id)
    return _transition(session_id, state, transitions.review_missed)


# --- JSON API ---
@router.get("/api/state")
async def get_state(session_id: str = Depends(get_session_id)):
    state = get_active_session(session_id)
    if state is None:
        return JSONResponse({"error": "Session invalid"}, status_code=401)
    return state.model_dump(mode="json")


@router.get("/api/notebooks")
async def list_notebooks():
    return [
        {
            "id": nb.id,
            "name": nb.name,
            "created_at": nb.created_at,
            "stats": notebook_stats(nb).model_dump(),
        }
        for nb in notebook_library.list_notebooks()
    ]
