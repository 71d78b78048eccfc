from __future__ import annotations

from typing import Optional, Protocol

import structlog
from pydantic import TypeAdapter, ValidationError

from stockbook.schemas import LANGUAGES, Movement, Product
from stockbook.seed import demo_catalog
from stockbook.shop_config import StorageConfig
from stockbook.translations import DEFAULT_LANGUAGE

logger = structlog.get_logger(__name__)

_products_adapter = TypeAdapter(list[Product])
_movements_adapter = TypeAdapter(list[Movement])


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, payload: str) -> None: ...


class PersistenceGateway:
    """Carga al iniciar y guarda en cada cambio: productos, movimientos e idioma.

    Cada colección se serializa completa bajo su propia clave; las escrituras
    no son transaccionales entre sí.
    """

    def __init__(
        self,
        store: BlobStore,
        storage: Optional[StorageConfig] = None,
        seed_catalog: bool = True,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        self._store = store
        self._storage = storage or StorageConfig()
        self._seed_catalog = seed_catalog
        self._default_language = default_language

    def load_products(self) -> list[Product]:
        raw = self._store.get(self._storage.products_key)
        if raw is None:
            return demo_catalog() if self._seed_catalog else []
        try:
            return _products_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Unreadable products blob, starting empty",
                key=self._storage.products_key,
                error=str(e),
            )
            return []

    def save_products(self, products: list[Product]) -> None:
        self._store.put(self._storage.products_key, _products_adapter.dump_json(products).decode("utf-8"))

    def load_movements(self) -> list[Movement]:
        raw = self._store.get(self._storage.movements_key)
        if raw is None:
            return []
        try:
            return _movements_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Unreadable movements blob, starting empty",
                key=self._storage.movements_key,
                error=str(e),
            )
            return []

    def save_movements(self, movements: list[Movement]) -> None:
        self._store.put(self._storage.movements_key, _movements_adapter.dump_json(movements).decode("utf-8"))

    def load_language(self) -> str:
        raw = (self._store.get(self._storage.language_key) or "").strip()
        return raw if raw in LANGUAGES else self._default_language

    def save_language(self, language: str) -> None:
        self._store.put(self._storage.language_key, language)
