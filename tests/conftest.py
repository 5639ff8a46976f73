"""
Shared fixtures for the CRM tests.
"""
from datetime import datetime, timezone

import mongomock
import pytest

from apps.clients.models import Client
from apps.clients.store import EntityStore, ListResult, StoreError, StoreNotFound
from floral_crm.mongodb import connect_mongodb, disconnect_mongodb


@pytest.fixture
def mongo():
    """MongoEngine connected to an in-memory mongomock database."""
    connect_mongodb("floral_crm_test", host="mongodb://localhost", mongo_client_class=mongomock.MongoClient)
    yield
    Client.drop_collection()
    disconnect_mongodb()


class InMemoryStore(EntityStore):
    """EntityStore double that records every call and can fail on demand."""

    def __init__(self):
        self.rows = {}
        self.calls = []
        self.fail_on = set()
        self.list_success = True
        self._seq = 0

    def _enter(self, op):
        self.calls.append(op)
        if op in self.fail_on:
            raise StoreError(f"simulated {op} failure")

    def seed(self, **fields):
        self._seq += 1
        record_id = f"{self._seq:024x}"
        now = datetime.now(timezone.utc).isoformat()
        self.rows[record_id] = {
            "email": None, "phone": None, "company": None, "eventType": None,
            "eventDate": None, "contactDate": None, "budget": None, "notes": None,
            **fields,
            "_id": record_id, "createdAt": now, "updatedAt": now,
        }
        return dict(self.rows[record_id])

    async def list(self):
        self._enter("list")
        return ListResult(success=self.list_success, data=[dict(r) for r in self.rows.values()])

    async def create(self, data):
        self._enter("create")
        return self.seed(**data)

    async def update(self, record_id, data):
        self._enter("update")
        if record_id not in self.rows:
            raise StoreNotFound(record_id)
        self.rows[record_id].update(data)
        self.rows[record_id]["updatedAt"] = datetime.now(timezone.utc).isoformat()
        return dict(self.rows[record_id])

    async def delete(self, record_id):
        self._enter("delete")
        if record_id not in self.rows:
            raise StoreNotFound(record_id)
        del self.rows[record_id]


@pytest.fixture
def store():
    store = InMemoryStore()
    store.seed(firstName="Maria", lastName="Gomez", status="booked", eventType="wedding",
               eventDate="2025-05-03", budget=3200.0)
    store.seed(firstName="Tom", lastName="Baker", status="quoted", eventType="corporate")
    store.calls.clear()
    return store
