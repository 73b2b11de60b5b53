"""FastAPI dependency injection."""

from functools import lru_cache

from src.config import settings
from src.data.storage import ProjectStore


@lru_cache
def get_store() -> ProjectStore:
    return ProjectStore(settings.database_path)
