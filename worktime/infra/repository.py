"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. Makes it easy to:
- Switch database implementations
- Mock data for testing
- Change data sources (local DB to cloud API)

Which store is used is decided once, by whoever builds the repositories
(see ``create_repositories``). The accounting services only ever receive
plain entries and config records.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from worktime.domain.models import TimeEntry, UserConfig
from worktime.errors import EntryNotFoundError, UnknownStorageBackendError
from worktime.infra.db import TimeEntryModel, UserConfigModel, DatabaseEngine, get_engine

logger = logging.getLogger(__name__)

CONFIG_ROW_ID = 1


def find_duplicates(entries: List[TimeEntry]) -> List[TimeEntry]:
    """
    Return every entry whose identity key was already seen earlier.

    The identity key is (date, type, start, end, notes); the first occurrence
    is the one that is kept.
    """
    seen = set()
    duplicates = []
    for entry in entries:
        key = entry.identity_key
        if key in seen:
            duplicates.append(entry)
        else:
            seen.add(key)
    return duplicates


class TimeEntryRepository(ABC):
    """
    Abstract store for time entries.
    """

    @abstractmethod
    async def list_all(self) -> List[TimeEntry]:
        """All entries, newest date first"""

    @abstractmethod
    async def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        """Get a specific entry by ID"""

    @abstractmethod
    async def create(self, entry: TimeEntry) -> TimeEntry:
        """Create a new entry, returning it with its ID"""

    async def create_many(self, entries: List[TimeEntry]) -> List[TimeEntry]:
        """Create several entries (bulk import)"""
        created = [await self.create(entry) for entry in entries]
        logger.info(f"Imported {len(created)} entries")
        return created

    @abstractmethod
    async def update(self, entry: TimeEntry) -> TimeEntry:
        """Update an existing entry"""

    @abstractmethod
    async def delete(self, entry_id: int) -> None:
        """Delete an entry by ID"""

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete all entries. Returns count of deleted rows."""

    @abstractmethod
    async def deduplicate(self) -> int:
        """Remove duplicated entries. Returns count of removed rows."""


class ConfigRepository(ABC):
    """
    Abstract store for the user configuration.
    """

    def __init__(self, defaults: Optional[UserConfig] = None):
        self.defaults = defaults or UserConfig()

    @abstractmethod
    async def get(self) -> UserConfig:
        """Get the configuration, creating it from defaults if missing"""

    @abstractmethod
    async def save(self, config: UserConfig) -> UserConfig:
        """Store the configuration"""


class SqlTimeEntryRepository(TimeEntryRepository):
    """
    Handles all TimeEntry-related database operations.

    Converts between domain models (Pydantic) and ORM models (SQLAlchemy).
    """

    def __init__(self, session: Optional[AsyncSession] = None,
                 engine: Optional[DatabaseEngine] = None):
        self.session = session
        self.engine = engine

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = self.engine or get_engine()
        return engine.get_session()

    @staticmethod
    def _to_domain(model: TimeEntryModel) -> TimeEntry:
        return TimeEntry(
            id=model.id,
            date=model.date,
            type=model.type,
            value=model.value,
            start_time=model.start_time,
            end_time=model.end_time,
            pause_duration=model.pause_duration,
            notes=model.notes,
        )

    async def list_all(self) -> List[TimeEntry]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(TimeEntryModel).order_by(TimeEntryModel.date.desc(), TimeEntryModel.id)
            )
            return [self._to_domain(m) for m in result.scalars().all()]

    async def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(TimeEntryModel).where(TimeEntryModel.id == entry_id)
            )
            model = result.scalar_one_or_none()
            return self._to_domain(model) if model else None

    async def create(self, entry: TimeEntry) -> TimeEntry:
        session = await self._get_session()
        async with session:
            model = TimeEntryModel(
                date=entry.date,
                type=entry.type.value,
                value=entry.value,
                start_time=entry.start_time,
                end_time=entry.end_time,
                pause_duration=entry.pause_duration,
                notes=entry.notes
            )
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return self._to_domain(model)

    async def create_many(self, entries: List[TimeEntry]) -> List[TimeEntry]:
        session = await self._get_session()
        async with session:
            models = [
                TimeEntryModel(
                    date=e.date,
                    type=e.type.value,
                    value=e.value,
                    start_time=e.start_time,
                    end_time=e.end_time,
                    pause_duration=e.pause_duration,
                    notes=e.notes
                )
                for e in entries
            ]
            session.add_all(models)
            await session.commit()
            for model in models:
                await session.refresh(model)
            logger.info(f"Imported {len(models)} entries")
            return [self._to_domain(m) for m in models]

    async def update(self, entry: TimeEntry) -> TimeEntry:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(TimeEntryModel).where(TimeEntryModel.id == entry.id)
            )
            model = result.scalar_one_or_none()
            if model is None:
                raise EntryNotFoundError(f"Time entry {entry.id} not found")

            model.date = entry.date
            model.type = entry.type.value
            model.value = entry.value
            model.start_time = entry.start_time
            model.end_time = entry.end_time
            model.pause_duration = entry.pause_duration
            model.notes = entry.notes

            await session.commit()
            return self._to_domain(model)

    async def delete(self, entry_id: int) -> None:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                delete(TimeEntryModel).where(TimeEntryModel.id == entry_id)
            )
            await session.commit()
            if result.rowcount == 0:
                raise EntryNotFoundError(f"Time entry {entry_id} not found")

    async def delete_all(self) -> int:
        session = await self._get_session()
        async with session:
            result = await session.execute(delete(TimeEntryModel))
            await session.commit()
            logger.info(f"Deleted all {result.rowcount} entries")
            return result.rowcount

    async def deduplicate(self) -> int:
        session = await self._get_session()
        async with session:
            result = await session.execute(select(TimeEntryModel).order_by(TimeEntryModel.id))
            entries = [self._to_domain(m) for m in result.scalars().all()]
            duplicate_ids = [e.id for e in find_duplicates(entries)]
            if duplicate_ids:
                await session.execute(
                    delete(TimeEntryModel).where(TimeEntryModel.id.in_(duplicate_ids))
                )
                await session.commit()
            logger.info(f"Removed {len(duplicate_ids)} duplicate entries")
            return len(duplicate_ids)


class SqlConfigRepository(ConfigRepository):
    """
    Handles the user configuration row (id 1).
    """

    def __init__(self, session: Optional[AsyncSession] = None,
                 engine: Optional[DatabaseEngine] = None,
                 defaults: Optional[UserConfig] = None):
        super().__init__(defaults)
        self.session = session
        self.engine = engine

    async def _get_session(self) -> AsyncSession:
        if self.session:
            return self.session
        engine = self.engine or get_engine()
        return engine.get_session()

    @staticmethod
    def _to_domain(model: UserConfigModel) -> UserConfig:
        return UserConfig(
            weekly_target_hours=model.weekly_target_hours,
            yearly_vacation_days=model.yearly_vacation_days,
            initial_overtime_balance=model.initial_overtime_balance,
            vacation_carryover=model.vacation_carryover,
        )

    async def get(self) -> UserConfig:
        session = await self._get_session()
        async with session:
            model = await session.get(UserConfigModel, CONFIG_ROW_ID)
            if model is None:
                # Bootstrap defaults on first access
                model = UserConfigModel(id=CONFIG_ROW_ID, **self.defaults.model_dump())
                session.add(model)
                await session.commit()
                logger.info("Created default user configuration")
            return self._to_domain(model)

    async def save(self, config: UserConfig) -> UserConfig:
        session = await self._get_session()
        async with session:
            await session.merge(UserConfigModel(id=CONFIG_ROW_ID, **config.model_dump()))
            await session.commit()
            return config


class InMemoryTimeEntryRepository(TimeEntryRepository):
    """
    Keeps entries in a dict. Used for tests, demos and throwaway sessions.
    """

    def __init__(self, entries: Optional[List[TimeEntry]] = None):
        self._entries: Dict[int, TimeEntry] = {}
        self._next_id = 1
        for entry in entries or []:
            self._store(entry)

    def _store(self, entry: TimeEntry) -> TimeEntry:
        stored = entry.model_copy(update={"id": self._next_id})
        self._entries[stored.id] = stored
        self._next_id += 1
        return stored

    async def list_all(self) -> List[TimeEntry]:
        ordered = sorted(self._entries.values(), key=lambda e: e.id)
        return sorted(ordered, key=lambda e: e.date, reverse=True)

    async def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        return self._entries.get(entry_id)

    async def create(self, entry: TimeEntry) -> TimeEntry:
        return self._store(entry)

    async def update(self, entry: TimeEntry) -> TimeEntry:
        if entry.id not in self._entries:
            raise EntryNotFoundError(f"Time entry {entry.id} not found")
        self._entries[entry.id] = entry
        return entry

    async def delete(self, entry_id: int) -> None:
        if self._entries.pop(entry_id, None) is None:
            raise EntryNotFoundError(f"Time entry {entry_id} not found")

    async def delete_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    async def deduplicate(self) -> int:
        entries = [self._entries[i] for i in sorted(self._entries)]
        duplicates = find_duplicates(entries)
        for entry in duplicates:
            del self._entries[entry.id]
        logger.info(f"Removed {len(duplicates)} duplicate entries")
        return len(duplicates)


class InMemoryConfigRepository(ConfigRepository):
    """
    Keeps the configuration in memory.
    """

    def __init__(self, defaults: Optional[UserConfig] = None):
        super().__init__(defaults)
        self._config: Optional[UserConfig] = None

    async def get(self) -> UserConfig:
        if self._config is None:
            self._config = self.defaults.model_copy()
        return self._config

    async def save(self, config: UserConfig) -> UserConfig:
        self._config = config
        return config


def create_repositories(backend: str = "sql", defaults: Optional[UserConfig] = None,
                        engine: Optional[DatabaseEngine] = None
                        ) -> Tuple[TimeEntryRepository, ConfigRepository]:
    """
    Build the entry and config repositories for a storage backend.

    Args:
        backend: "sql" or "memory"
        defaults: Configuration to bootstrap an empty store with
        engine: Database engine for the "sql" backend (global engine if omitted)

    Returns:
        (entry repository, config repository)
    """
    if backend == "sql":
        return (
            SqlTimeEntryRepository(engine=engine),
            SqlConfigRepository(engine=engine, defaults=defaults),
        )
    if backend == "memory":
        return InMemoryTimeEntryRepository(), InMemoryConfigRepository(defaults=defaults)
    raise UnknownStorageBackendError(f"Unknown storage backend: {backend!r}")
