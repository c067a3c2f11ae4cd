import pytest

from pagebuilder_toolkit.core.exceptions import ConfigError
from pagebuilder_toolkit.core.keymap import EditorCommand, KeyMap, normalize_chord


class TestNormalizeChord:
    @pytest.mark.parametrize(
        "raw, canonical",
        [
            ("ctrl+D", "mod+D"),
            ("cmd+D", "mod+D"),
            ("right_cmd+d", "mod+D"),
            ("shift+alt+V", "alt+shift+V"),
            ("shift+right_cmd+V", "mod+shift+V"),
            ("ctrl+Right", "mod+right"),
            ("del", "del"),
            ("Delete", "del"),
        ],
    )
    def test_aliases(self, raw, canonical):
        assert normalize_chord(raw) == canonical

    def test_empty(self):
        assert normalize_chord("") == ""


class TestKeyMap:
    def test_platform_aliases_resolve_to_same_command(self, keymap):
        for chord in ("alt+D", "ctrl+D", "cmd+D", "right_cmd+D"):
            assert keymap.resolve(chord) is EditorCommand.CLONE

    def test_paste_styles_in_any_modifier_order(self, keymap):
        for chord in ("alt+shift+V", "shift+ctrl+V", "shift+cmd+V", "right_cmd+shift+V"):
            assert keymap.resolve(chord) is EditorCommand.PASTE_STYLES

    def test_vertical_and_horizontal_bindings(self, keymap):
        assert keymap.resolve("alt+up") is EditorCommand.ALIGN_VERTICAL_DECREASE
        assert keymap.resolve("cmd+down") is EditorCommand.ALIGN_VERTICAL_INCREASE
        assert keymap.resolve("ctrl+right") is EditorCommand.ALIGN_HORIZONTAL_INCREASE
        # horizontal alignment is not bound on alt
        assert keymap.resolve("alt+right") is None

    def test_unrecognised_chord(self, keymap):
        assert keymap.resolve("ctrl+Q") is None
        assert keymap.resolve("hyper+D") is None

    def test_conflicting_binding_raises(self):
        with pytest.raises(ConfigError):
            KeyMap.from_config({"copy": ["mod+C"], "clone": ["ctrl+C"]})

    def test_unknown_command_raises(self):
        with pytest.raises(ConfigError):
            KeyMap.from_config({"explode": ["mod+X"]})

    def test_chords_for(self, keymap):
        assert keymap.chords_for(EditorCommand.REMOVE) == ["alt+del", "del", "mod+backspace", "mod+del"]
