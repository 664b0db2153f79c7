"""Tests for environment parsing and app factory configuration checks."""

import pytest
from cachelib import SimpleCache

from stocklist import create_app
from stocklist.config import (
    DEFAULT_CATEGORIES,
    EnvReader,
    is_default_secret,
    resolve_environment,
)


class TestEnvReader:

    def test_str_strips_and_defaults(self):
        reader = EnvReader({"A": "  value ", "B": "   "})
        assert reader.str("A") == "value"
        assert reader.str("B", "fallback") == "fallback"
        assert reader.str("MISSING") is None

    @pytest.mark.parametrize("raw, expected", [("yes", True), ("ON", True), ("0", False), ("off", False)])
    def test_bool_values(self, raw, expected):
        assert EnvReader({"FLAG": raw}).bool("FLAG") is expected

    def test_bool_invalid_value_warns(self):
        reader = EnvReader({"FLAG": "maybe"})
        assert reader.bool("FLAG", True) is True
        assert len(reader.warnings) == 1

    def test_list_preserves_order_and_case(self):
        reader = EnvReader({"PRODUCT_CATEGORIES": "Tools, garden ,,Toys"})
        assert reader.list("PRODUCT_CATEGORIES") == ("Tools", "garden", "Toys")

    def test_list_of_only_separators_uses_default(self):
        reader = EnvReader({"PRODUCT_CATEGORIES": " , ,"})
        assert reader.list("PRODUCT_CATEGORIES", DEFAULT_CATEGORIES) == DEFAULT_CATEGORIES
        assert reader.warnings


class TestResolveEnvironment:

    def test_defaults_to_development(self):
        assert resolve_environment(EnvReader({})).name == "development"

    def test_normalizes_case(self):
        info = resolve_environment(EnvReader({"FLASK_ENV": "Production"}))
        assert info.name == "production"
        assert info.raw_value == "Production"

    def test_invalid_value_raises(self):
        with pytest.raises(RuntimeError, match="FLASK_ENV"):
            resolve_environment(EnvReader({"FLASK_ENV": "staging"}))


def test_is_default_secret():
    assert is_default_secret(None)
    assert is_default_secret("")
    assert is_default_secret("devkey-please-change-in-production")
    assert not is_default_secret("a-real-secret")


# ── create_app ───────────────────────────────────────────────────────────────


def _testing_app(**overrides):
    return create_app({
        "FLASK_ENV": "testing",
        "SESSION_TYPE": "cachelib",
        "SESSION_CACHELIB": SimpleCache(),
        **overrides,
    })


class TestCreateApp:

    def test_testing_config_is_selected(self, app):
        assert app.config["TESTING"] is True
        assert app.config["WTF_CSRF_CHECK_DEFAULT"] is False
        assert app.config["SESSION_PERMANENT"] is False

    def test_categories_can_be_overridden(self):
        app = _testing_app(PRODUCT_CATEGORIES=["Tools", "Toys"])
        assert app.config["PRODUCT_CATEGORIES"] == ("Tools", "Toys")
        html = app.test_client().get("/").get_data(as_text=True)
        assert '<option value="Tools"' in html
        assert '<option value="Books"' not in html

    def test_empty_categories_are_rejected(self):
        with pytest.raises(RuntimeError, match="PRODUCT_CATEGORIES"):
            _testing_app(PRODUCT_CATEGORIES=[])

    def test_production_requires_secret_key(self):
        with pytest.raises(RuntimeError, match="FLASK_SECRET_KEY"):
            create_app({"FLASK_ENV": "production", "SECRET_KEY": ""})

    def test_production_requires_redis(self):
        with pytest.raises(RuntimeError, match="Redis"):
            create_app({"FLASK_ENV": "production", "SECRET_KEY": "a-real-secret", "REDIS_URL": None})

    def test_redis_url_selects_redis_sessions(self):
        app = create_app({
            "FLASK_ENV": "testing",
            "REDIS_URL": "redis://localhost:6379/0",
        })
        assert app.config["SESSION_TYPE"] == "redis"
        assert app.config["SESSION_REDIS"] is not None

    def test_default_backend_is_filesystem_cache(self, tmp_path):
        from flask import Flask

        from stocklist import _configure_sessions

        bare = Flask(__name__, instance_path=str(tmp_path))
        bare.config.update(ENV="development", SECRET_KEY="x")
        _configure_sessions(bare)
        assert bare.config["SESSION_TYPE"] == "cachelib"
        assert (tmp_path / "session_files").is_dir()
