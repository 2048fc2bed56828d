"""
测试 LanguageCatalog — 打开项目、语言切换、通知、fallback 文本
"""

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from localization import (  # noqa: E402
    CatalogState,
    CatalogStateError,
    ConfigError,
    LanguageCatalog,
    LanguageEntry,
    LanguageProject,
    LanguageTable,
    UnknownLanguageError,
    runtime,
)
from localization.language_catalog import CURRENT_LANGUAGE_KEY  # noqa: E402
from storage import MemoryPreferenceStore  # noqa: E402


def _table(**pairs) -> LanguageTable:
    return LanguageTable([LanguageEntry(k, v) for k, v in pairs.items()])


@pytest.fixture
def project():
    return LanguageProject("Demo", "en", ["en", "es"])


@pytest.fixture
def catalog(project):
    cat = LanguageCatalog()
    cat.open(project, {
        "en": _table(Confirm="Confirm", greeting="hello world", Quit="Quit"),
        "es": _table(Confirm="Confirmar", greeting="hola mundo"),
    })
    return cat


# ── 生命周期 ────────────────────────────────────────────────────

class TestOpen:

    def test_defaults_to_main_language(self, catalog):
        assert catalog.state is CatalogState.READY
        assert catalog.current_language == "en"
        assert catalog.main_language == "en"
        assert catalog.languages == ["en", "es"]

    def test_main_language_not_in_languages(self):
        with pytest.raises(ConfigError):
            LanguageCatalog().open(LanguageProject("Demo", "fr", ["en", "es"]), {})

    def test_missing_tables_default_to_empty(self, project):
        cat = LanguageCatalog()
        cat.open(project, {"en": _table(Confirm="Confirm")})
        assert cat.table("es").is_empty

    def test_saved_language_is_restored(self, project):
        prefs = MemoryPreferenceStore({CURRENT_LANGUAGE_KEY: "es"})
        cat = LanguageCatalog()
        cat.open(project, {}, prefs)
        assert cat.current_language == "es"

    def test_unknown_saved_language_ignored(self, project):
        prefs = MemoryPreferenceStore({CURRENT_LANGUAGE_KEY: "de"})
        cat = LanguageCatalog()
        cat.open(project, {}, prefs)
        assert cat.current_language == "en"

    def test_close_resets_state(self, catalog):
        catalog.close()
        assert catalog.state is CatalogState.UNINITIALIZED
        assert catalog.current_language is None
        assert catalog.lang_string("Confirm") == "[Confirm]"
        with pytest.raises(CatalogStateError):
            catalog.set_language("es")

    def test_set_language_before_open(self):
        with pytest.raises(CatalogStateError):
            LanguageCatalog().set_language("en")


# ── 查询 ────────────────────────────────────────────────────────

class TestLookup:

    def test_lang_string(self, catalog):
        assert catalog.lang_string("Confirm") == "Confirm"
        assert catalog.lang_string("CONFIRM") == "Confirm"

    def test_null_key(self, catalog):
        assert catalog.lang_string("") == "[null]"
        assert catalog.lang_string(None) == "[null]"

    def test_missing_key_is_bracketed(self, catalog):
        assert catalog.lang_string("Foo") == "[Foo]"

    def test_upper_applies_to_fallback(self, catalog):
        assert catalog.lang_upper("Foo") == "[FOO]"
        assert catalog.lang_upper("Confirm") == "CONFIRM"

    def test_lower(self, catalog):
        assert catalog.lang_lower("Quit") == "quit"
        assert catalog.lang_lower("Foo") == "[foo]"

    def test_capitalized(self, catalog):
        assert catalog.lang_capitalized("greeting") == "Hello world"
        assert catalog.lang_capitalized("Quit") == "Quit"

    def test_capitalized_empty_passes_through(self, project):
        cat = LanguageCatalog()
        cat.open(project, {"en": _table(Empty="")})
        assert cat.lang_capitalized("Empty") == ""

    def test_has_key_current_table_only(self, catalog):
        assert catalog.has_key("quit")
        catalog.set_language("es")
        assert not catalog.has_key("Quit")
        assert not catalog.has_key("")


# ── 语言切换 ────────────────────────────────────────────────────

class TestSetLanguage:

    def test_switch_changes_lookup(self, catalog):
        catalog.set_language("es")
        assert catalog.current_language == "es"
        assert catalog.lang_string("Confirm") == "Confirmar"
        assert catalog.lang_string("Quit") == "[Quit]"

    def test_same_language_is_noop(self, catalog):
        received = []
        catalog.subscribe(received.append)
        catalog.set_language("en")
        assert received == []
        assert catalog.current_language == "en"

    def test_unknown_language(self, catalog):
        catalog.set_language("es")
        received = []
        catalog.subscribe(received.append)
        with pytest.raises(UnknownLanguageError) as info:
            catalog.set_language("fr")
        assert info.value.code == "fr"
        assert catalog.current_language == "es"
        assert received == []

    def test_notification_order(self, catalog):
        calls = []
        catalog.subscribe(lambda code: calls.append(("first", code)))
        catalog.subscribe(lambda code: calls.append(("second", code)))
        catalog.set_language("es")
        assert calls == [("first", "es"), ("second", "es")]

    def test_failing_subscriber_does_not_stop_delivery(self, catalog, caplog):
        received = []

        def broken(code):
            raise RuntimeError("boom")

        catalog.subscribe(broken)
        catalog.subscribe(received.append)
        with caplog.at_level(logging.ERROR):
            catalog.set_language("es")
        assert received == ["es"]
        assert "subscriber" in caplog.text

    def test_unsubscribe(self, catalog):
        received = []
        catalog.subscribe(received.append)
        catalog.unsubscribe(received.append)
        catalog.unsubscribe(received.append)  # 重复取消不报错
        catalog.set_language("es")
        assert received == []

    def test_switch_saves_preference(self, project):
        prefs = MemoryPreferenceStore()
        cat = LanguageCatalog()
        cat.open(project, {}, prefs)
        cat.set_language("es")
        assert prefs.get_string(CURRENT_LANGUAGE_KEY) == "es"


# ── 进程级句柄 ──────────────────────────────────────────────────

class TestRuntime:

    def test_install_and_teardown(self, catalog):
        runtime.install(catalog)
        assert runtime.get_catalog() is catalog
        runtime.teardown()
        assert catalog.state is CatalogState.UNINITIALIZED
        with pytest.raises(CatalogStateError):
            runtime.get_catalog()

    def test_install_replaces_previous(self, catalog, project):
        other = LanguageCatalog()
        other.open(project, {})
        runtime.install(catalog)
        runtime.install(other)
        assert catalog.state is CatalogState.UNINITIALIZED
        assert runtime.get_catalog() is other
        runtime.teardown()
