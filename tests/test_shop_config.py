"""
Tests for shop configuration loading.
"""
import json

from stockbook.shop_config import ShopConfig, config_path, load_shop_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_shop_config(tmp_path / "nope.conf")

    assert cfg == ShopConfig()
    assert cfg.storage.products_key == "invsmart_products"
    assert cfg.shop.default_language == "pt"


def test_conf_file_is_parsed(tmp_path):
    path = tmp_path / "shop.conf"
    path.write_text(
        "[shop]\n"
        "name = Loja Teste\n"
        "default_language = EN\n"
        "seed_catalog = no\n"
        "[storage]\n"
        "products_key = prod\n"
        "[ai]\n"
        "model = gpt-test\n"
        "timeout = abc\n"
        "base_url = http://localhost:9999/v1\n",
        encoding="utf-8",
    )

    cfg = load_shop_config(path)

    assert cfg.shop.name == "Loja Teste"
    assert cfg.shop.default_language == "en"
    assert cfg.shop.seed_catalog is False
    assert cfg.storage.products_key == "prod"
    assert cfg.storage.movements_key == "invsmart_movements"
    assert cfg.ai.model == "gpt-test"
    assert cfg.ai.timeout == 30.0
    assert cfg.ai.base_url == "http://localhost:9999/v1"


def test_unknown_language_falls_back(tmp_path):
    path = tmp_path / "shop.conf"
    path.write_text("[shop]\ndefault_language = de\n", encoding="utf-8")

    assert load_shop_config(path).shop.default_language == "pt"


def test_json_config(tmp_path):
    path = tmp_path / "shop.json"
    path.write_text(json.dumps({"ai": {"model": "gpt-json"}}), encoding="utf-8")

    cfg = load_shop_config(path)

    assert cfg.ai.model == "gpt-json"
    assert cfg.shop.name == "Pixel Print"


def test_config_path_env_override(monkeypatch, tmp_path):
    target = tmp_path / "custom.conf"
    monkeypatch.setenv("STOCKBOOK_CONFIG_PATH", str(target))

    assert config_path() == target


def test_bundled_config_loads(monkeypatch):
    monkeypatch.delenv("STOCKBOOK_CONFIG_PATH", raising=False)
    cfg = load_shop_config()

    assert cfg.shop.name == "Pixel Print"
    assert "currency" not in ShopConfig.model_fields
    assert cfg.storage.language_key == "pixel_lang"
