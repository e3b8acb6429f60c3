from __future__ import annotations

import asyncio
import copy

from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:5000"
    CORS_ORIGIN_REGEX: Optional[str] = None

    QUESTION_TIME_LIMIT_SEC: int = 20
    LOW_TIME_THRESHOLD_SEC: int = 5
    QUESTIONS_PER_SESSION: int = 20
    MAX_PLAYER_NAME_LENGTH: int = 15

    API_BASE_URL: str = "http://localhost:5000"
    API_TIMEOUT_SEC: float = 10.0

    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 5000


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


class InMemoryCursor:
    def __init__(self, collection: "InMemoryCollection", query: Dict[str, Any]):
        self._collection = collection
        self._query = query or {}
        self._sort_key: Optional[str] = None
        self._sort_direction: int = 1
        self._materialised: Optional[Iterator[Dict[str, Any]]] = None

    def sort(self, key: str, direction: int):
        self._sort_key = key
        self._sort_direction = direction
        return self

    async def _ensure_materialised(self):
        if self._materialised is not None:
            return

        docs = await self._collection._find_all(self._query)

        if self._sort_key is not None:
            docs.sort(key=lambda d: d.get(self._sort_key), reverse=self._sort_direction < 0)

        self._materialised = iter(docs)

    async def to_list(self) -> List[Dict[str, Any]]:
        return [doc async for doc in self]

    def __aiter__(self):
        return self

    async def __anext__(self):
        await self._ensure_materialised()
        assert self._materialised is not None
        try:
            return next(self._materialised)
        except StopIteration as exc:
            raise StopAsyncIteration from exc


class InMemoryCollection:
    """Async document collection kept in insertion order."""

    def __init__(self):
        self._docs: List[Dict[str, Any]] = []
        self._lock = asyncio.Lock()

    async def _find_all(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        async with self._lock:
            return [copy.deepcopy(doc) for doc in self._docs if self._matches(doc, query)]

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        async with self._lock:
            for doc in self._docs:
                if self._matches(doc, query):
                    return copy.deepcopy(doc)
        return None

    def find(self, query: Optional[Dict[str, Any]] = None):
        return InMemoryCursor(self, query or {})

    async def count_documents(self, query: Dict[str, Any]) -> int:
        async with self._lock:
            return sum(1 for doc in self._docs if self._matches(doc, query))

    async def insert_one(self, document: Dict[str, Any]):
        async with self._lock:
            self._docs.append(copy.deepcopy(document))

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        *,
        upsert: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """Apply ``update`` to the first match and return the updated document."""
        async with self._lock:
            for idx, doc in enumerate(self._docs):
                if self._matches(doc, query):
                    updated = self._apply_update(copy.deepcopy(doc), update)
                    self._docs[idx] = updated
                    return copy.deepcopy(updated)

            if upsert:
                new_doc = self._apply_update(copy.deepcopy(query), update)
                self._docs.append(new_doc)
                return copy.deepcopy(new_doc)

        return None

    def _apply_update(self, doc: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        for op, payload in update.items():
            if op != "$inc":  # pragma: no cover - only counters are updated today
                raise ValueError(f"Unsupported update operator: {op}")
            for key, value in payload.items():
                doc[key] = doc.get(key, 0) + value
        return doc

    def _matches(self, doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, expected in (query or {}).items():
            if isinstance(expected, dict):  # pragma: no cover - operators are not needed yet
                raise ValueError(f"Unsupported query operator(s): {expected}")
            if doc.get(key) != expected:
                return False
        return True


class InMemoryDatabase:
    def __init__(self):
        self.questions = InMemoryCollection()
        self.leaderboard_entries = InMemoryCollection()
        self.counters = InMemoryCollection()


db: Any = InMemoryDatabase()
