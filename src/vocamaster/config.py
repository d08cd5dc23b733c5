import os

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class Settings:
    PROJECT_NAME: str = "vocamaster"
    DEBUG: bool = os.environ.get("VOCAMASTER_DEBUG", "") == "1"
    LOG_DIR: str = os.environ.get("VOCAMASTER_LOG_DIR", "log")
    LOG_FILE: str = "vocamaster.log"
    DB_DIR: str = os.environ.get("VOCAMASTER_DB_DIR", "db")
    DB_FILE: str = "vocamaster.db"
    STORAGE_KEY: str = "voca_master_notebooks"
    TEMPLATE_DIR: str = os.path.join(PACKAGE_DIR, "templates")
    STATIC_DIR: str = os.path.join(PACKAGE_DIR, "static")
    DEFAULT_QUESTION_COUNT: int = 10
    QUICK_COUNTS = (10, 30, 50, 100)
    MAX_UPLOAD_BYTES: int = 5_000_000
    SESSION_COOKIE_NAME: str = "vocamaster_session_id"
    SESSION_TIMEOUT_MINUTES: int = 120
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.environ.get("GEMINI_MODEL", "gemini-3-flash-preview")


settings = Settings()
