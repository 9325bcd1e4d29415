# -*- coding: utf-8 -*-
"""
Expense / Budget Storage

Per-user CRUD for expenses and budgets. Every entity gets an id from one
auto-incrementing counter. Two backends share the same interface:

- MemStorage: dicts in process memory (default, local development, tests)
- RedisStorage: one Redis hash per entity kind, JSON values, INCR for ids

Payloads are expected to be validated already (see finchat.schemas).
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Optional, Union

from redis import Redis, RedisError

from finchat import config
from finchat.parser.types import ExpenseCandidate

logger = logging.getLogger(__name__)

EXPENSES = "expenses"
BUDGETS = "budgets"


class StorageError(Exception):
    """Storage backend failure"""


class NotFoundError(StorageError):
    """No entity with the given id"""


@dataclass
class Expense:
    id: int
    user_id: str
    amount: float
    category: str
    description: str
    date: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Budget:
    id: int
    user_id: str
    category: str
    amount: float
    period: str

    def to_dict(self) -> dict:
        return asdict(self)


_RECORD_TYPES = {EXPENSES: Expense, BUDGETS: Budget}


class BaseStorage:
    """
    Storage operations shared by all backends.

    Backends implement the five primitives below; records are plain dicts
    carrying at least `id` and `user_id`.
    """

    # === Backend primitives ===

    def _next_id(self) -> int:
        raise NotImplementedError

    def _put(self, kind: str, record: dict) -> None:
        raise NotImplementedError

    def _get(self, kind: str, entity_id: int) -> Optional[dict]:
        raise NotImplementedError

    def _all(self, kind: str) -> list[dict]:
        raise NotImplementedError

    def _remove(self, kind: str, entity_id: int) -> bool:
        raise NotImplementedError

    # === Generic operations ===

    def _list(self, kind: str, user_id: str):
        records = [r for r in self._all(kind) if r.get("user_id") == user_id]
        records.sort(key=lambda r: r["id"])
        return [_RECORD_TYPES[kind](**r) for r in records]

    def _fetch(self, kind: str, entity_id: int):
        record = self._get(kind, entity_id)
        return _RECORD_TYPES[kind](**record) if record else None

    def _create(self, kind: str, user_id: str, data: dict):
        record = {**data, "id": self._next_id(), "user_id": user_id}
        entity = _RECORD_TYPES[kind](**record)
        self._put(kind, entity.to_dict())
        logger.info(f"Created {kind[:-1]} {entity.id} for user {user_id}")
        return entity

    def _update(self, kind: str, entity_id: int, changes: dict):
        record = self._get(kind, entity_id)
        if not record:
            raise NotFoundError(f"{kind[:-1]} {entity_id} not found")
        # id / owner are immutable
        updates = {k: v for k, v in changes.items() if k not in ("id", "user_id")}
        entity = _RECORD_TYPES[kind](**{**record, **updates})
        self._put(kind, entity.to_dict())
        return entity

    def _delete(self, kind: str, entity_id: int) -> None:
        if not self._remove(kind, entity_id):
            raise NotFoundError(f"{kind[:-1]} {entity_id} not found")
        logger.info(f"Deleted {kind[:-1]} {entity_id}")

    # === Expenses ===

    def get_expenses(self, user_id: str) -> list[Expense]:
        return self._list(EXPENSES, user_id)

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._fetch(EXPENSES, expense_id)

    def create_expense(self, user_id: str, data: Union[dict, ExpenseCandidate]) -> Expense:
        """Create an expense from a validated payload or a chat ExpenseCandidate."""
        if isinstance(data, ExpenseCandidate):
            data = data.to_dict()
        return self._create(EXPENSES, user_id, data)

    def update_expense(self, expense_id: int, changes: dict) -> Expense:
        return self._update(EXPENSES, expense_id, changes)

    def delete_expense(self, expense_id: int) -> None:
        self._delete(EXPENSES, expense_id)

    # === Budgets ===

    def get_budgets(self, user_id: str) -> list[Budget]:
        return self._list(BUDGETS, user_id)

    def get_budget(self, budget_id: int) -> Optional[Budget]:
        return self._fetch(BUDGETS, budget_id)

    def create_budget(self, user_id: str, data: dict) -> Budget:
        return self._create(BUDGETS, user_id, data)

    def update_budget(self, budget_id: int, changes: dict) -> Budget:
        return self._update(BUDGETS, budget_id, changes)

    def delete_budget(self, budget_id: int) -> None:
        self._delete(BUDGETS, budget_id)


class MemStorage(BaseStorage):
    """In-memory storage (lost on restart)"""

    def __init__(self):
        self._tables: dict[str, dict[int, dict]] = {EXPENSES: {}, BUDGETS: {}}
        self._current_id = 1
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        with self._lock:
            entity_id = self._current_id
            self._current_id += 1
            return entity_id

    def _put(self, kind: str, record: dict) -> None:
        with self._lock:
            self._tables[kind][record["id"]] = dict(record)

    def _get(self, kind: str, entity_id: int) -> Optional[dict]:
        record = self._tables[kind].get(entity_id)
        return dict(record) if record else None

    def _all(self, kind: str) -> list[dict]:
        with self._lock:
            return [dict(r) for r in self._tables[kind].values()]

    def _remove(self, kind: str, entity_id: int) -> bool:
        with self._lock:
            return self._tables[kind].pop(entity_id, None) is not None


class RedisStorage(BaseStorage):
    """
    Redis-backed storage.

    Keys:
        {prefix}:next_id        counter shared by all entity kinds
        {prefix}:expenses       hash id -> JSON record
        {prefix}:budgets        hash id -> JSON record
    """

    def __init__(self, client: Redis, prefix: Optional[str] = None):
        self.client = client
        self.prefix = prefix or config.REDIS_KEY_PREFIX

    def _key(self, name: str) -> str:
        return f"{self.prefix}:{name}"

    def _call(self, op: str, func, *args) -> Any:
        try:
            return func(*args)
        except RedisError as e:
            logger.error(f"Redis {op} failed: {e}")
            raise StorageError(f"storage unavailable: {e}") from e

    def _next_id(self) -> int:
        return int(self._call("incr", self.client.incr, self._key("next_id")))

    def _put(self, kind: str, record: dict) -> None:
        value = json.dumps(record, ensure_ascii=False)
        self._call("hset", self.client.hset, self._key(kind), str(record["id"]), value)

    def _get(self, kind: str, entity_id: int) -> Optional[dict]:
        value = self._call("hget", self.client.hget, self._key(kind), str(entity_id))
        return json.loads(value) if value else None

    def _all(self, kind: str) -> list[dict]:
        values = self._call("hvals", self.client.hvals, self._key(kind)) or []
        return [json.loads(v) for v in values]

    def _remove(self, kind: str, entity_id: int) -> bool:
        return bool(self._call("hdel", self.client.hdel, self._key(kind), str(entity_id)))


_storage: Optional[BaseStorage] = None


def get_storage() -> BaseStorage:
    """Get or initialize the process storage (Redis when REDIS_URL is set)."""
    global _storage
    if _storage is None:
        if config.REDIS_ENABLED:
            logger.info("Initializing Redis storage")
            _storage = RedisStorage(Redis.from_url(config.REDIS_URL, decode_responses=True))
        else:
            logger.info("REDIS_URL not set, using in-memory storage")
            _storage = MemStorage()
    return _storage
