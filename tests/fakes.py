"""
In-memory stand-ins for the Firestore client and the identity adapter.

Only the surface the routers use is implemented: documents, `add`, equality
`FieldFilter`s, single-field `order_by`, `limit`, batches and `collections()`.
Every `collection()` call is recorded in `calls`.
"""
import copy
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from firebase_admin import auth as fb_auth
from firebase_admin import firestore
from google.api_core.exceptions import NotFound


class FakeSnapshot:
    def __init__(self, ref, data):
        self.reference = ref
        self.id = ref.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocRef:
    def __init__(self, db, collection, doc_id):
        self._db = db
        self._collection = collection
        self.id = doc_id

    @property
    def _docs(self):
        return self._db.store.setdefault(self._collection, {})

    def get(self):
        return FakeSnapshot(self, copy.deepcopy(self._docs.get(self.id)))

    def set(self, data, merge=False):
        data = self._db.resolve(data)
        if merge and self.id in self._docs:
            self._docs[self.id].update(data)
        else:
            self._docs[self.id] = data

    def update(self, data):
        if self.id not in self._docs:
            raise NotFound(f"No document to update: {self._collection}/{self.id}")
        self._docs[self.id].update(self._db.resolve(data))

    def delete(self):
        self._docs.pop(self.id, None)


class FakeQuery:
    def __init__(self, db, collection, filters=(), order=None, limit=None):
        self._db = db
        self._collection = collection
        self._filters = tuple(filters)
        self._order = order
        self._limit = limit

    def _copy(self, **changes):
        params = dict(filters=self._filters, order=self._order, limit=self._limit)
        params.update(changes)
        return FakeQuery(self._db, self._collection, **params)

    def where(self, filter):
        assert filter.op_string == "==", "only equality filters are supported"
        return self._copy(filters=self._filters + (filter,))

    def order_by(self, field, direction=firestore.Query.ASCENDING):
        return self._copy(order=(field, direction))

    def limit(self, count):
        return self._copy(limit=count)

    def stream(self):
        docs = self._db.store.get(self._collection, {})
        rows = [
            (doc_id, data) for doc_id, data in docs.items()
            if all(data.get(f.field_path) == f.value for f in self._filters)
        ]
        if self._order:
            field, direction = self._order
            # Firestore leaves out documents that lack the ordered field
            rows = [r for r in rows if field in r[1]]
            rows.sort(key=lambda r: r[1][field], reverse=direction == firestore.Query.DESCENDING)
        if self._limit is not None:
            rows = rows[: self._limit]
        return iter([
            FakeSnapshot(FakeDocRef(self._db, self._collection, doc_id), copy.deepcopy(data))
            for doc_id, data in rows
        ])

    def get(self):
        return list(self.stream())


class FakeCollection(FakeQuery):
    def __init__(self, db, name):
        super().__init__(db, name)
        self.id = name

    def document(self, doc_id=None):
        return FakeDocRef(self._db, self.id, doc_id or uuid.uuid4().hex[:20])

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return self._db.tick(), ref


class FakeBatch:
    def __init__(self, db):
        self._db = db
        self.deletes = []

    def delete(self, ref):
        self.deletes.append(ref)

    def commit(self):
        self._db.commits.append([ref.id for ref in self.deletes])
        for ref in self.deletes:
            ref.delete()


class FakeFirestore:
    def __init__(self):
        self.store = {}
        self.calls = []
        self.commits = []
        self.fail_on = set()
        self._clock = datetime.now(timezone.utc)

    def tick(self):
        self._clock += timedelta(milliseconds=1)
        return self._clock

    def resolve(self, data):
        return {k: self.tick() if v is firestore.SERVER_TIMESTAMP else copy.deepcopy(v) for k, v in data.items()}

    def seed(self, collection, doc_id, data):
        self.store.setdefault(collection, {})[doc_id] = dict(data)

    def docs(self, collection):
        return self.store.get(collection, {})

    def collection(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"{name} backend unavailable")
        return FakeCollection(self, name)

    def collections(self):
        self.calls.append("*")
        return [FakeCollection(self, name) for name, docs in self.store.items() if docs]

    def batch(self):
        return FakeBatch(self)


def make_user(uid, email=None, display_name=None, last_sign_in=None, created=1700000000000, providers=()):
    return SimpleNamespace(
        uid=uid,
        email=email,
        display_name=display_name,
        photo_url=None,
        email_verified=bool(email),
        disabled=False,
        user_metadata=SimpleNamespace(creation_timestamp=created, last_sign_in_timestamp=last_sign_in),
        provider_data=list(providers),
    )


class FakeIdentity:
    def __init__(self):
        self.tokens = {}
        self.users = []
        self.fail_listing = False

    def verify_token(self, id_token):
        if id_token not in self.tokens:
            raise ValueError("Token has expired")
        return dict(self.tokens[id_token])

    def list_users(self, max_results=1000):
        if self.fail_listing:
            raise RuntimeError("auth backend unavailable")
        return self.users[:max_results]

    def get_user_by_email(self, email):
        for user in self.users:
            if user.email == email:
                return user
        raise fb_auth.UserNotFoundError(f"No user record found for the provided email: {email}")
