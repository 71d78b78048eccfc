from __future__ import annotations

import configparser
import json
import os
from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from stockbook.schemas import LANGUAGES
from stockbook.translations import DEFAULT_LANGUAGE


class ShopInfo(BaseModel):
    name: str = "Pixel Print"
    default_language: str = DEFAULT_LANGUAGE
    seed_catalog: bool = True


class StorageConfig(BaseModel):
    products_key: str = "invsmart_products"
    movements_key: str = "invsmart_movements"
    language_key: str = "pixel_lang"


class AIConfig(BaseModel):
    model: str = "gpt-4o-mini"
    timeout: float = 30.0
    base_url: Optional[str] = None


class ShopConfig(BaseModel):
    shop: ShopInfo = Field(default_factory=ShopInfo)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ai: AIConfig = Field(default_factory=AIConfig)


_cached_configs: Dict[str, Tuple[ShopConfig, float]] = {}


def config_path() -> Path:
    override = (os.getenv("STOCKBOOK_CONFIG_PATH") or "").strip()
    if override:
        return Path(override)
    return Path(__file__).with_name("shop_config.conf")


def load_shop_config(path: Optional[Path] = None) -> ShopConfig:
    """Carga la configuración de la tienda (.conf o .json), cacheada por mtime."""
    path = path or config_path()
    path_str = str(path)
    try:
        mtime = float(path.stat().st_mtime)
    except OSError:
        mtime = 0.0

    cached = _cached_configs.get(path_str)
    if cached is not None and cached[1] == mtime:
        return cached[0]

    if not path.exists():
        cfg0 = ShopConfig()
        _cached_configs[path_str] = (cfg0, mtime)
        return cfg0

    if path.suffix.lower() == ".json":
        cfg_json = ShopConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
        _cached_configs[path_str] = (cfg_json, mtime)
        return cfg_json

    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")

    def get(section: str, key: str, default: str = "") -> str:
        return (parser.get(section, key, fallback=default) or "").strip()

    def get_bool(section: str, key: str, default: bool) -> bool:
        try:
            return parser.getboolean(section, key, fallback=default)
        except ValueError:
            return default

    def get_float(section: str, key: str, default: float) -> float:
        try:
            return parser.getfloat(section, key, fallback=default)
        except ValueError:
            return default

    default_language = get("shop", "default_language", DEFAULT_LANGUAGE).lower()
    if default_language not in LANGUAGES:
        default_language = DEFAULT_LANGUAGE

    storage_defaults = StorageConfig()
    cfg = ShopConfig(
        shop=ShopInfo(
            name=get("shop", "name", "Pixel Print"),
            default_language=default_language,
            seed_catalog=get_bool("shop", "seed_catalog", True),
        ),
        storage=StorageConfig(
            products_key=get("storage", "products_key", storage_defaults.products_key)
            or storage_defaults.products_key,
            movements_key=get("storage", "movements_key", storage_defaults.movements_key)
            or storage_defaults.movements_key,
            language_key=get("storage", "language_key", storage_defaults.language_key)
            or storage_defaults.language_key,
        ),
        ai=AIConfig(
            model=get("ai", "model", "gpt-4o-mini") or "gpt-4o-mini",
            timeout=get_float("ai", "timeout", 30.0),
            base_url=get("ai", "base_url", "") or None,
        ),
    )

    _cached_configs[path_str] = (cfg, mtime)
    return cfg
