"""
Tests for configuration and per-export state: themes, the theme store,
settings, the export context, registries, media bundling and logging.
"""

import logging
import sys

import pytest

from article_exporter.components import Audio
from article_exporter.context import MediaBundler, get_filename
from article_exporter.exceptions import SettingsError, ThemeError
from article_exporter.logger import LOG_LEVEL_ENV, level_from_env, setup_logger
from article_exporter.registry import Registry
from article_exporter.settings import Settings
from article_exporter.theme import THEME_DEFAULTS, Theme
from article_exporter.theme_store import ThemeStore


# --- Theme ---

@pytest.mark.parametrize("orientation, columns, span, offset, alignment", [
    ("left", 7, 6, 0, 3),
    ("right", 7, 6, 1, 3),
    ("center", 9, 7, 1, 5),
])
def test_computed_layout_values(orientation, columns, span, offset, alignment):
    theme = Theme(values={"body_orientation": orientation})

    assert theme.get_value("layout_columns") == columns
    assert theme.get_value("body_column_span") == span
    assert theme.get_value("body_offset") == offset
    assert theme.get_value("alignment_offset") == alignment


def test_values_fall_back_to_defaults():
    theme = Theme(values={"body_size": 20})

    assert theme.get_value("body_size") == 20
    assert theme.get_value("body_font") == THEME_DEFAULTS["body_font"]
    assert theme.get_value("no_such_option") is None


def test_computed_values_cannot_be_set():
    with pytest.raises(ValueError):
        Theme().set_value("body_offset", 2)


def test_inactive_meta_components():
    theme = Theme(values={"meta_component_order": ["title"]})
    assert theme.inactive_meta_components() == ["cover", "byline"]


def test_delete_spec_override_prunes_component():
    theme = Theme()
    theme.set_spec_override("body", "json", {"role": "body"})

    assert theme.delete_spec_override("body", "json")
    assert theme.json_templates == {}
    assert not theme.delete_spec_override("body", "json")


# --- Theme store ---

def test_store_always_has_default_theme():
    store = ThemeStore()
    assert store.active_name == "Default"
    assert store.list_themes() == ["Default"]


def test_store_persists_themes_and_active(tmp_path):
    store = ThemeStore(tmp_path)
    store.save_theme(Theme(name="Dark Mode", values={"body_color": "#ffffff"}))
    store.set_active("Dark Mode")
    Audio.get_spec("json").save({"role": "audio"}, store)

    reloaded = ThemeStore(tmp_path)

    assert reloaded.active_name == "Dark Mode"
    assert reloaded.get_active().get_value("body_color") == "#ffffff"
    assert reloaded.get_active().get_spec_override("audio", "json") == {"role": "audio"}
    assert (tmp_path / "Dark_Mode.json").exists()


def test_store_skips_unreadable_files(tmp_path):
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "invalid.json").write_text('{"name": "x"}')

    store = ThemeStore(tmp_path)
    assert store.list_themes() == ["Default"]


def test_store_missing_theme():
    store = ThemeStore()
    with pytest.raises(ThemeError):
        store.get_theme("Missing")
    with pytest.raises(ThemeError):
        store.set_active("Missing")


def test_active_theme_cannot_be_deleted(tmp_path):
    store = ThemeStore(tmp_path)
    store.save_theme(Theme(name="Other"))

    with pytest.raises(ThemeError):
        store.delete_theme("Default")
    assert store.delete_theme("Other")
    assert not (tmp_path / "Other.json").exists()
    assert not store.delete_theme("Other")


# --- Settings ---

def test_settings_from_env():
    settings = Settings.from_env(environ={
        "ARTICLE_EXPORTER_HTML_SUPPORT": "yes",
        "ARTICLE_EXPORTER_IN_ARTICLE_POSITION": "5",
        "UNRELATED": "ignored",
    })

    assert settings.html_support == "yes"
    assert settings.in_article_position == 5
    assert settings.use_remote_images == "no"


def test_settings_validation():
    with pytest.raises(SettingsError):
        Settings.build({"html_support": "maybe"})
    with pytest.raises(SettingsError):
        Settings().with_values(in_article_position="many")


def test_settings_lookup():
    settings = Settings(aside_component_class="aside")

    assert settings.has("aside_component_class")
    assert settings.get("aside_component_class") == "aside"
    assert not settings.has("body_font")
    assert settings.get("body_font") is None


# --- Export context ---

def test_context_reads_settings_before_theme(make_context):
    context = make_context(settings_override=Settings(html_support="yes"))

    assert context.get_setting("html_support") == "yes"
    assert context.get_setting("body_font") == "AvenirNext-Regular"
    assert context.get_setting("body_column_span") == 6


def test_subcontext_shares_state_with_prefixed_names(make_context):
    context = make_context()
    child = context.subcontext("aside")

    assert child.prefixed("body-layout") == "aside-subcomponent-body-layout"
    assert child.parent == "aside"
    assert not child.meta_components
    assert child.registries is context.registries
    assert child.bundler is context.bundler

    child.log_error("component_errors", "nested problem")
    assert context.errors == {"component_errors": ["nested problem"]}


def test_dropcap_claimed_once(make_context):
    context = make_context(theme_override=Theme(values={"initial_dropcap": "yes"}))

    assert not context.subcontext("aside").claim_dropcap()
    assert context.claim_dropcap()
    assert not context.claim_dropcap()


def test_identifiers_are_unique(make_context):
    context = make_context()
    identifiers = {context.next_identifier(seed="body") for _ in range(5)}

    assert len(identifiers) == 5
    assert all(identifier.startswith("component-") for identifier in identifiers)


# --- Registries and bundles ---

def test_registry_stores_copies():
    registry = Registry("layout")
    definition = {"margin": {"top": 1}}

    assert registry.register("a", definition) == "a"
    definition["margin"]["top"] = 2

    assert registry.get("a") == {"margin": {"top": 1}}
    assert "a" in registry
    assert len(registry) == 1


def test_bundler_deduplicates():
    bundler = MediaBundler()

    assert bundler.bundle("http://example.com/img/a.jpg?w=300") == "bundle://a.jpg"
    assert bundler.bundle("http://example.com/img/a.jpg?w=300") == "bundle://a.jpg"
    assert bundler.bundles == ["http://example.com/img/a.jpg?w=300"]
    assert bundler.find_original("bundle://a.jpg") == "http://example.com/img/a.jpg?w=300"
    assert bundler.find_original("bundle://b.jpg") is None


def test_bundler_passes_through_remote_and_bundled():
    bundler = MediaBundler()

    assert bundler.bundle("http://example.com/a.jpg", use_remote=True) == "http://example.com/a.jpg"
    assert bundler.bundle("bundle://b.jpg") == "bundle://b.jpg"
    assert bundler.bundles == []


def test_get_filename():
    assert get_filename("https://example.com/path/my%20photo.png#frag") == "my photo.png"


# --- Logging ---

@pytest.mark.parametrize("value, level", [
    ("", logging.INFO),
    ("debug", logging.DEBUG),
    ("30", 30),
    ("loud", logging.INFO),
])
def test_log_level_from_env(monkeypatch, value, level):
    monkeypatch.setenv(LOG_LEVEL_ENV, value)
    assert level_from_env() == level


def test_setup_logger_writes_to_stderr_once(tmp_path):
    log_file = str(tmp_path / "export.log")

    logger = setup_logger("article_exporter.test_setup", level=logging.DEBUG, log_file=log_file)
    setup_logger("article_exporter.test_setup", level=logging.WARNING, log_file=log_file)

    streams = [h.stream for h in logger.handlers if type(h) is logging.StreamHandler]
    assert streams == [sys.stderr]
    assert len(logger.handlers) == 2
    assert logger.level == logging.WARNING
    assert all(handler.level == logging.WARNING for handler in logger.handlers)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
