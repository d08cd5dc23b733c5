import logging

import pytest
from fastapi.testclient import TestClient

from vocamaster.config import settings
from vocamaster.database import init_db
from vocamaster.globals import sessions
from vocamaster.models import WordEntry


@pytest.fixture
def isolated_db(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DB_DIR", str(tmp_path / "db"))
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "log"))
    init_db()
    return tmp_path


@pytest.fixture
def client(isolated_db):
    from vocamaster.app import create_app

    sessions.clear()
    with TestClient(create_app()) as test_client:
        yield test_client
    sessions.clear()
    logger = logging.getLogger("vocamaster")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def five_words():
    return [
        WordEntry(no=i, word=w, meaning=m)
        for i, (w, m) in enumerate(
            [
                ("persist", "to continue firmly"),
                ("abandon", "to give up completely"),
                ("candid", "truthful and straightforward"),
                ("diligent", "showing care in one's work"),
                ("eloquent", "fluent and persuasive"),
            ],
            start=1,
        )
    ]
