from datetime import datetime, timedelta
from typing import Dict, Optional

from fastapi.templating import Jinja2Templates

from .config import settings
from .hints import HintProvider
from .library import NotebookLibrary
from .state import AppState
from .storage import NotebookStore

templates = Jinja2Templates(directory=settings.TEMPLATE_DIR)
notebook_library = NotebookLibrary(NotebookStore())
hint_provider = HintProvider()

sessions: Dict[str, AppState] = {}


def get_active_session(session_id: Optional[str]) -> Optional[AppState]:
    if not session_id or session_id not in sessions:
        return None
    state = sessions[session_id]
    if datetime.now() - state.updated_at > timedelta(
        minutes=settings.SESSION_TIMEOUT_MINUTES
    ):
        del sessions[session_id]
        return None
    return state


def store_session(session_id: str, state: AppState):
    sessions[session_id] = state.model_copy(update={"updated_at": datetime.now()})
