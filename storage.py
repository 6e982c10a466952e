"""Key-value record stores.

Every store keeps plain strings under fixed names; serialization is the
repository's job. Three backends:

- ``DatabaseRecordStore`` — the ``records`` table, shared by every browser.
- ``SessionRecordStore``  — the signed Flask session, one per browser.
- ``MemoryRecordStore``   — a dict, for scripts and tests.
"""

from typing import Dict, Optional

from flask import session

from extensions import db
from models import Record


class RecordStore:
    """Interface shared by all backends."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryRecordStore(RecordStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class DatabaseRecordStore(RecordStore):
    """Records in the SQL table. Needs an application context."""

    def get(self, key):
        record = db.session.get(Record, key)
        return record.value if record is not None else None

    def set(self, key, value):
        record = db.session.get(Record, key)
        if record is None:
            db.session.add(Record(key=key, value=value))
        else:
            record.value = value
        db.session.commit()

    def delete(self, key):
        record = db.session.get(Record, key)
        if record is not None:
            db.session.delete(record)
            db.session.commit()


class SessionRecordStore(RecordStore):
    """Records in the browser's signed session cookie. Needs a request context."""

    def get(self, key):
        return session.get(key)

    def set(self, key, value):
        session[key] = value

    def delete(self, key):
        session.pop(key, None)
