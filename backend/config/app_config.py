"""
Application Configuration

Runtime settings for the help requests backend, read from environment
variables once at import time.

Includes:
- Database location (file-backed SQLite by default)
- Log directory and level
- Bearer token secret and lifetime
- CORS origins
"""
import os
from pathlib import Path


def _env_flag(name: str, default: str = 'false') -> bool:
    """Interpret an environment variable as a boolean flag."""
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


DATA_DIR = Path(os.environ.get('HELP_REQUESTS_DATA_DIR', str(Path.home() / '.help_requests')))

DATABASE_URL = os.environ.get(
    'HELP_REQUESTS_DATABASE_URL',
    f"sqlite:///{DATA_DIR / 'help_requests.db'}"
)
SQL_ECHO = _env_flag('HELP_REQUESTS_SQL_ECHO')

LOG_DIR = Path(os.environ.get('HELP_REQUESTS_LOG_DIR', str(DATA_DIR / 'logs')))
LOG_LEVEL = os.environ.get('HELP_REQUESTS_LOG_LEVEL', 'INFO').upper()

JWT_SECRET = os.environ.get('HELP_REQUESTS_JWT_SECRET', 'change_me')
TOKEN_TTL_MINUTES = int(os.environ.get('HELP_REQUESTS_TOKEN_TTL_MINUTES', str(60 * 24)))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get('HELP_REQUESTS_CORS_ORIGINS', '*').split(',')
    if origin.strip()
]


def is_memory_database(url: str = DATABASE_URL) -> bool:
    """True when the URL points at an in-memory SQLite database."""
    return url.startswith('sqlite') and (url.endswith(':memory:') or url in ('sqlite://', 'sqlite:///'))

HOST = os.environ.get('HELP_REQUESTS_HOST', '0.0.0.0')
PORT = int(os.environ.get('HELP_REQUESTS_PORT', '8000'))
