import logging

from .database import get_db_connection


class SQLiteHandler(logging.Handler):
    """
    A logging handler that writes log records to the ``logs`` table.
    """

    def __init__(self, level=logging.WARNING):
        super().__init__(level)

    def emit(self, record):
        try:
            conn = get_db_connection()
            with conn:
                conn.execute(
                    "INSERT INTO logs (level, message) VALUES (?, ?)",
                    (record.levelname, self.format(record)),
                )
            conn.close()
        except Exception:
            self.handleError(record)
