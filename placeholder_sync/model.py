from contextlib import contextmanager
from typing import Any, TypeVar, Type

from pymongo import MongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from .errors import Conflict, NotInitialized, StoreError

T = TypeVar('T', bound='Model')

# Fields that only exist on joined reads, never stored.
TRANSIENT_FIELDS = ('posts', 'comments')
NO_ID = {'_id': 0}


class Collection:
    """
    Thin wrapper around one MongoDB collection.
    Driver errors become StoreError, unique-index violations become Conflict,
    and documents come back without the internal _id.
    """

    def __init__(self, coll):
        self._coll = coll

    @property
    def name(self) -> str:
        return self._coll.name

    def insert_one(self, doc: dict) -> None:
        with _translate(self.name):
            self._coll.insert_one(_clean(doc))

    def insert_many(self, docs: list[dict]) -> None:
        if not docs:
            return
        with _translate(self.name):
            self._coll.insert_many([_clean(d) for d in docs])

    def upsert_one(self, doc: dict) -> None:
        """Replace the document with the same id, or insert it."""
        with _translate(self.name):
            self._coll.replace_one({'id': doc['id']}, _clean(doc), upsert=True)

    def find_one(self, filter: dict) -> dict | None:
        with _translate(self.name):
            return self._coll.find_one(filter, NO_ID)

    def find(self, filter: dict = None) -> list[dict]:
        with _translate(self.name):
            return list(self._coll.find(filter or {}, NO_ID))

    def count(self, filter: dict = None) -> int:
        with _translate(self.name):
            return self._coll.count_documents(filter or {})

    def delete_one(self, filter: dict) -> int:
        with _translate(self.name):
            return self._coll.delete_one(filter).deleted_count

    def delete_many(self, filter: dict = None) -> int:
        with _translate(self.name):
            return self._coll.delete_many(filter or {}).deleted_count


@contextmanager
def _translate(collection: str):
    try:
        yield
    except DuplicateKeyError as e:
        raise Conflict(f'Duplicate id in {collection}', str(e)) from e
    except PyMongoError as e:
        raise StoreError(f'Database error on {collection}', str(e)) from e


def _clean(doc: dict) -> dict:
    # Copy so the driver never writes _id into the caller's dict.
    return {k: v for k, v in doc.items() if k not in TRANSIENT_FIELDS and k != '_id'}


class Store:
    """
    Process-wide database handle. Created once at startup, connected once,
    then handed to the Flask app.

        store = Store('mongodb://localhost:27017', 'swift_assignment')
        store.connect()
        store.collection('users').find_one({'id': 1})
    """
    COLLECTIONS = ('users', 'posts', 'comments')

    def __init__(self, uri: str, db_name: str, client_factory=MongoClient):
        self.uri = uri
        self.db_name = db_name
        self._client_factory = client_factory
        self._client = None
        self._db = None

    @property
    def connected(self) -> bool:
        return self._db is not None

    def connect(self):
        if self._db is not None:
            return self._db
        client = None
        try:
            client = self._client_factory(self.uri)
            client.admin.command('ping')
            db = client[self.db_name]
            for name in self.COLLECTIONS:
                db[name].create_index('id', unique=True)
        except PyMongoError as e:
            if client is not None:
                client.close()
            raise StoreError('Error connecting to MongoDB', str(e)) from e
        self._client = client
        self._db = db
        return db

    @property
    def db(self):
        if self._db is None:
            raise NotInitialized('Database not initialized. Call connect() first.')
        return self._db

    def collection(self, name: str) -> Collection:
        return Collection(self.db[name])

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None


class Model:
    """
    A stored document. Subclasses name their collection; every field the
    document carries is kept, declared or not.

        user = User.by_id(store, 1)
        user.with_posts(store).to_dict()
    """
    collection: str = ''

    def __init__(self, data: dict[str, Any] = None):
        self._data = dict(data or {})

    def __getattr__(self, key):
        data = self.__dict__.get('_data', {})
        if key in data:
            return data[key]
        raise AttributeError(key)

    def __setattr__(self, key, value):
        if key.startswith('_'):
            super().__setattr__(key, value)
        else:
            self._data[key] = value

    def __eq__(self, other):
        return type(self) is type(other) and self._data == other._data

    @property
    def id(self):
        return self._data.get('id')

    def to_dict(self) -> dict:
        data = dict(self._data)
        for k in TRANSIENT_FIELDS:
            if isinstance(data.get(k), list):
                data[k] = [x.to_dict() if isinstance(x, Model) else x for x in data[k]]
        return data

    @classmethod
    def coll(cls, store: Store) -> Collection:
        return store.collection(cls.collection)

    @classmethod
    def by_id(cls: Type[T], store: Store, id: int) -> T | None:
        row = cls.coll(store).find_one({'id': id})
        return cls(row) if row else None

    @classmethod
    def where(cls: Type[T], store: Store, filter: dict) -> list[T]:
        return [cls(row) for row in cls.coll(store).find(filter)]

    @classmethod
    def insert_many(cls, store: Store, items: list['Model']) -> None:
        cls.coll(store).insert_many([x._data for x in items])

    @classmethod
    def upsert_many(cls, store: Store, items: list['Model']) -> None:
        coll = cls.coll(store)
        for x in items:
            coll.upsert_one(x._data)

    def insert(self, store: Store) -> None:
        self.coll(store).insert_one(self._data)

    def upsert(self, store: Store) -> None:
        self.coll(store).upsert_one(self._data)
