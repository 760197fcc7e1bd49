import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from visual_learning import create_app
from visual_learning.core.config import Settings
from visual_learning.core.security import issue_token


def _matches(document: dict, query: dict) -> bool:
    return all(document.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length):
        return self._documents if length is None else self._documents[:length]


class FakeCollection:
    """In-memory stand-in for the handful of Motor collection calls the routes make."""

    def __init__(self):
        self.documents: list[dict] = []

    def find(self, query=None):
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents if _matches(doc, query or {})])

    async def find_one(self, query):
        for doc in self.documents:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document):
        stored = copy.deepcopy(document)
        stored.setdefault('_id', ObjectId())
        self.documents.append(stored)
        return SimpleNamespace(acknowledged=True, inserted_id=stored['_id'])

    async def update_one(self, query, update):
        for doc in self.documents:
            if _matches(doc, query):
                changes = update['$set']
                modified = any(doc.get(key) != value for key, value in changes.items())
                doc.update(copy.deepcopy(changes))
                return SimpleNamespace(acknowledged=True, matched_count=1, modified_count=int(modified), upserted_id=None)
        return SimpleNamespace(acknowledged=True, matched_count=0, modified_count=0, upserted_id=None)

    async def delete_one(self, query):
        for index, doc in enumerate(self.documents):
            if _matches(doc, query):
                del self.documents[index]
                return SimpleNamespace(acknowledged=True, deleted_count=1)
        return SimpleNamespace(acknowledged=True, deleted_count=0)


class FakeStore:
    is_open = True

    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())

    async def ping(self):
        return True


class FakePaymentProvider:
    def __init__(self, client_secret='pi_123_secret_456'):
        self.client_secret = client_secret
        self.amounts: list[int] = []

    async def create_payment_intent(self, amount, currency=None):
        self.amounts.append(amount)
        return self.client_secret


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def payment_provider() -> FakePaymentProvider:
    return FakePaymentProvider()


@pytest.fixture
def app(store, payment_provider):
    application = create_app()
    application.state.store = store
    application.state.payment_provider = payment_provider
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def strict_config() -> Settings:
    return Settings(STRICT_ROLE_GUARDS=True, ACCESS_SECRET_TOKEN='strict-test-secret')


@pytest.fixture
def strict_client(store, payment_provider, strict_config) -> TestClient:
    application = create_app(strict_config)
    application.state.store = store
    application.state.payment_provider = payment_provider
    return TestClient(application)


def bearer(email: str, config: Settings | None = None) -> dict:
    return {'Authorization': f'Bearer {issue_token({"email": email}, config)}'}


def add_user(store: FakeStore, email: str, role: str = 'student') -> str:
    user_id = ObjectId()
    store.collection('users').documents.append({'_id': user_id, 'email': email, 'name': 'Test', 'role': role})
    return str(user_id)
