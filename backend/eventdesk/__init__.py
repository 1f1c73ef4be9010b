"""
eventdesk: event CRUD API.

Settings (DATABASE_URL, DB_POOL_SIZE, LOG_LEVEL, ...) are read with
os.getenv at import time by the submodules, so a local .env file is
loaded here first.
"""

from dotenv import load_dotenv

load_dotenv()

__version__ = "0.1.0"
