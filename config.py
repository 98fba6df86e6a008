import os
from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '.env'))

def _resolve_sqlite_path(uri: str, project_root: str) -> str:
    """Convert relative SQLite URI to absolute path.

    Args:
        uri: SQLite URI like 'sqlite:///instance/qa_forum.db'
        project_root: Absolute path to project root directory

    Returns:
        Absolute SQLite URI like 'sqlite:////srv/qa_forum/instance/qa_forum.db'
    """
    if not uri.startswith('sqlite:///') or uri == 'sqlite:///:memory:':
        return uri

    relative_path = uri[10:]  # Remove 'sqlite:///'
    if os.path.isabs(relative_path):
        return uri

    absolute_path = os.path.abspath(os.path.join(project_root, relative_path))

    # Ensure instance directory exists BEFORE any SQLAlchemy connection attempt
    instance_dir = os.path.dirname(absolute_path)
    if instance_dir and not os.path.exists(instance_dir):
        os.makedirs(instance_dir, exist_ok=True)

    # SQLite expects forward slashes, also on Windows
    absolute_path = absolute_path.replace('\\', '/')

    return f'sqlite:///{absolute_path}'


def _engine_options(uri: str) -> dict:
    # SQLite has no server-side pool worth sizing
    if uri.startswith('sqlite'):
        return {}
    return {
        "pool_size": int(os.environ.get("DB_POOL_SIZE", "5")),
        "max_overflow": int(os.environ.get("DB_MAX_OVERFLOW", "10")),
        "pool_timeout": int(os.environ.get("DB_POOL_TIMEOUT", "30")),
        "pool_pre_ping": True,
    }


class Config:
    # Compute IS_DEV once
    _env = os.environ.get("FLASK_ENV") or os.environ.get("ENV") or "production"
    IS_DEV = str(_env).lower() in {"development", "dev"}

    # In production SECRET_KEY must be set.
    # In development we allow a fallback to avoid breaking local runs.
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY and IS_DEV:
        SECRET_KEY = "dev-secret-key"

    SQLALCHEMY_DATABASE_URI = _resolve_sqlite_path(
        os.environ.get('DATABASE_URL', 'sqlite:///instance/qa_forum.db'),
        basedir,
    )
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI)

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_DB = os.environ.get("AUTO_CREATE_DB", "0") == "1"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    ANSWER_MAX_LENGTH = 300
