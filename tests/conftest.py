# tests/conftest.py

from __future__ import annotations

import pytest

from apps.board.services import TaskService
from apps.board.store import TaskStore

from .fakes import RecordingBus


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def bus() -> RecordingBus:
    return RecordingBus()


@pytest.fixture()
def service(store: TaskStore, bus: RecordingBus) -> TaskService:
    """TaskService real (ORM) com bus de contagem no lugar do channel layer"""
    return TaskService(store=store, bus=bus)


@pytest.fixture()
def insert_task(store: TaskStore):
    """Insere direto no store, com `order` escolhido pelo teste"""

    def _insert(order: int, owner_id: str = "u1", title: str | None = None, category: str = "todo"):
        return store.insert(
            {
                "title": title or f"Task {order}",
                "category": category,
                "owner_id": owner_id,
                "order": order,
            }
        )

    return _insert
