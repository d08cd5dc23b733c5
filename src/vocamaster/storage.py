import json
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from .config import settings
from .database import read_value, write_value
from .models import Notebook

logger = logging.getLogger(__name__)

_notebook_list = TypeAdapter(List[Notebook])


class NotebookStore:
    """Full-snapshot persistence of every notebook under one storage key."""

    def __init__(self, key: str = None):
        self.key = key or settings.STORAGE_KEY

    def load(self) -> List[Notebook]:
        raw = read_value(self.key)
        if raw is None:
            return []
        try:
            return _notebook_list.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse saved notebooks: {e}")
            return []

    def save(self, notebooks: List[Notebook]):
        write_value(self.key, _notebook_list.dump_json(notebooks).decode("utf-8"))
