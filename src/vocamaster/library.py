import logging
from typing import List, Sequence

from .exceptions import NotebookNotFoundError
from .mastery import aggregate
from .models import Notebook, QuizResult, WordEntry
from .storage import NotebookStore

logger = logging.getLogger(__name__)

DEFAULT_NAME = "My Notebook"


class NotebookLibrary:
    """
    Manages the saved notebooks.

    Every mutation loads the full list, changes it and writes it back.
    Newest notebooks come first.
    """

    def __init__(self, store: NotebookStore):
        self.store = store

    def list_notebooks(self) -> List[Notebook]:
        return self.store.load()

    def get(self, notebook_id: str) -> Notebook:
        for notebook in self.store.load():
            if notebook.id == notebook_id:
                return notebook
        raise NotebookNotFoundError(notebook_id)

    def create(self, words: Sequence[WordEntry]) -> Notebook:
        notebooks = self.store.load()
        notebook = Notebook(name=f"New Notebook {len(notebooks) + 1}", words=list(words))
        self.store.save([notebook] + notebooks)
        logger.info(f"Created notebook {notebook.id} with {len(notebook.words)} words")
        return notebook

    def rename(self, notebook_id: str, name: str) -> Notebook:
        return self._update(notebook_id, name=name.strip() or DEFAULT_NAME)

    def delete(self, notebook_id: str):
        notebooks = self.store.load()
        remaining = [nb for nb in notebooks if nb.id != notebook_id]
        if len(remaining) == len(notebooks):
            raise NotebookNotFoundError(notebook_id)
        self.store.save(remaining)
        logger.info(f"Deleted notebook {notebook_id}")

    def record_results(self, notebook_id: str, results: Sequence[QuizResult]) -> Notebook:
        notebook = self.get(notebook_id)
        return self._update(notebook_id, mastery=aggregate(notebook.mastery, results))

    def _update(self, notebook_id: str, **changes) -> Notebook:
        notebooks = self.store.load()
        for i, notebook in enumerate(notebooks):
            if notebook.id == notebook_id:
                notebooks[i] = notebook.model_copy(update=changes)
                self.store.save(notebooks)
                return notebooks[i]
        raise NotebookNotFoundError(notebook_id)
