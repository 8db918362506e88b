"""Infrastructure layer - Configuration and persistence"""

from .db import DatabaseEngine, get_engine, init_db
from .repository import (
    ConfigRepository,
    InMemoryConfigRepository,
    InMemoryTimeEntryRepository,
    SqlConfigRepository,
    SqlTimeEntryRepository,
    TimeEntryRepository,
    create_repositories,
)

__all__ = [
    "DatabaseEngine",
    "get_engine",
    "init_db",
    "ConfigRepository",
    "InMemoryConfigRepository",
    "InMemoryTimeEntryRepository",
    "SqlConfigRepository",
    "SqlTimeEntryRepository",
    "TimeEntryRepository",
    "create_repositories",
]
