"""
Pytest configuration and fixtures for API testing.
MongoDB is replaced by mongomock, the upstream API by FakeUpstreamSession.
"""
import mongomock
import pytest

from placeholder_sync import Config, Store, create_app
from placeholder_sync.models import User
from placeholder_sync.upstream import PlaceholderClient
from data_builder import DataBuilder, FakeUpstreamSession

UPSTREAM_URL = 'http://upstream.test'
MONGO_URI = 'mongodb://localhost:27017'


def make_store() -> Store:
    return Store(MONGO_URI, 'placeholder_sync_test', client_factory=mongomock.MongoClient)


@pytest.fixture
def config():
    return Config(mongo_uri=MONGO_URI, placeholder_url=UPSTREAM_URL, db_name='placeholder_sync_test')


@pytest.fixture
def dataset():
    return DataBuilder().with_users(3).with_posts_per_user(2).with_comments_per_post(3).build()


@pytest.fixture
def upstream(dataset):
    return FakeUpstreamSession(UPSTREAM_URL, dataset)


@pytest.fixture
def store():
    s = make_store()
    s.connect()
    yield s
    s.close()


@pytest.fixture
def clean_db(store):
    """Reset the database before each test."""
    User.delete_all(store)
    yield


@pytest.fixture
def api(config, store, upstream, clean_db):
    """API client fixture - provides helper methods for API calls."""
    class APIClient:
        def __init__(self, app, store):
            self.app = app
            self.client = app.test_client()
            self.store = store

        def get(self, path: str):
            return self.client.get(path)

        def put(self, path: str, json=None, data=None):
            if json is not None:
                return self.client.put(path, json=json)
            return self.client.put(path, data=data, content_type='application/json')

        def delete(self, path: str):
            return self.client.delete(path)

        def load(self):
            """Run the load workflow and assert it succeeded."""
            r = self.get('/load')
            assert r.status_code == 200, f"Load failed: {r.get_data(as_text=True)}"
            return r.get_json()

        def count(self, collection: str, filter: dict = None) -> int:
            return self.store.collection(collection).count(filter)

        def counts(self) -> dict:
            return {name: self.count(name) for name in ('users', 'posts', 'comments')}

    app = create_app(config, store, PlaceholderClient(UPSTREAM_URL, session=upstream))
    return APIClient(app, store)
