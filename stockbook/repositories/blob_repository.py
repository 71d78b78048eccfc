from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from stockbook.models import StoredBlob


class BlobRepository:
    def __init__(self, db: Session):
        self._db = db

    def get(self, key: str) -> Optional[str]:
        return self._db.scalar(select(StoredBlob.payload).where(StoredBlob.key == key))

    def put(self, key: str, payload: str) -> None:
        row = self._db.get(StoredBlob, key)
        if row is None:
            self._db.add(StoredBlob(key=key, payload=payload))
        else:
            row.payload = payload
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise


class InMemoryBlobRepository:
    """Misma interfaz que BlobRepository, sin base de datos."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def put(self, key: str, payload: str) -> None:
        self.blobs[key] = payload
