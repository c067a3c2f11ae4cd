"""Tests for configuration loading and logging set-up."""

import logging

import pytest

from pagebuilder_toolkit.config import ConfigManager
from pagebuilder_toolkit.core.keymap import EditorCommand, KeyMap
from pagebuilder_toolkit.core.registry import ComponentRegistry
from pagebuilder_toolkit.logging_config import setup_logging


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point user overrides at an empty directory and drop the cached instance."""
    monkeypatch.setenv("PAGEBUILDER_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset()
    yield tmp_path
    ConfigManager.reset()


def test_singleton():
    assert ConfigManager() is ConfigManager()


def test_packaged_defaults_load():
    config = ConfigManager()

    components = config.get_components()
    assert components["Wrapper"]["container"] is True
    assert components["Form"]["style_merge_depth"] == 3
    assert config.get_keymap()["clone"] == ["mod+D", "alt+D"]
    assert config.get_logging_config()["version"] == 1


def test_user_overrides_replace_top_level_entries(isolated_config):
    (isolated_config / "keymap.yml").write_text('clone: ["mod+K"]\n', encoding="utf-8")

    keymap = ConfigManager().get_keymap()

    assert keymap["clone"] == ["mod+K"]
    assert keymap["copy"] == ["mod+C", "alt+C"]


def test_invalid_user_file_is_ignored(isolated_config):
    (isolated_config / "components.yml").write_text("Wrapper: [unclosed\n", encoding="utf-8")

    assert ConfigManager().get_components()["Wrapper"]["container"] is True


def test_registry_and_keymap_from_packaged_config():
    registry = ComponentRegistry.default()
    keymap = KeyMap.default()

    assert registry.is_container("Section")
    assert registry.default_style("Column") == {"verticalAlign": "top"}
    assert "text" in registry.content_keys("Button")
    assert keymap.resolve("right_cmd+shift+V") is EditorCommand.PASTE_STYLES
    assert keymap.resolve("alt+del") is EditorCommand.REMOVE


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        package_logger = logging.getLogger("pagebuilder_toolkit")
        saved = (package_logger.level, list(package_logger.handlers), package_logger.propagate)
        yield
        for handler in package_logger.handlers:
            if handler not in saved[1]:
                handler.close()
        package_logger.setLevel(saved[0])
        package_logger.handlers = saved[1]
        package_logger.propagate = saved[2]

    def test_file_handler_writes_to_log_dir(self, monkeypatch, tmp_path):
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("PAGEBUILDER_LOG_DIR", str(log_dir))

        setup_logging()

        handlers = logging.getLogger("pagebuilder_toolkit").handlers
        files = [h.baseFilename for h in handlers if isinstance(h, logging.FileHandler)]
        assert files == [str(log_dir / "app.log")]
        assert (log_dir / "app.log").exists()

    def test_debug_edits_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PAGEBUILDER_LOG_DIR", str(tmp_path))
        monkeypatch.setenv("PAGEBUILDER_DEBUG_EDITS", "true")
        name = "pagebuilder_toolkit.core.services.array_component"
        logger = logging.getLogger(name)
        monkeypatch.setattr(logger, "handlers", [])
        monkeypatch.setattr(logger, "level", logger.level)

        setup_logging()

        assert logger.level == logging.DEBUG
        assert any(h.level <= logging.DEBUG for h in logger.handlers)
