class VocaMasterError(Exception):
    """Base class for application errors."""


class WordListImportError(VocaMasterError):
    """Raised when an uploaded word list cannot be turned into a notebook.

    The message is shown to the user as-is.
    """


class NotebookNotFoundError(VocaMasterError):
    def __init__(self, notebook_id: str):
        super().__init__(f"Notebook not found: {notebook_id}")
        self.notebook_id = notebook_id


class InvalidTransitionError(VocaMasterError):
    """Raised when a quiz intent arrives in a state that cannot accept it."""
