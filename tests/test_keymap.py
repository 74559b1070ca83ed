"""Tests for key press routing in the compose screen."""

import pytest
from textual import events

from hermes_tui.compose import CANCEL, SEND, ComposeField, ComposeMode, KeyPress, dispatch
from hermes_tui.compose.keymap import INSERT_KEYS, KEYMAP, NORMAL_KEYS, VISUAL_KEYS, lookup
from hermes_tui.compose.engine import ComposeEngine


def press(key: str, character: str | None = None) -> KeyPress:
    """Build a key press; single characters type themselves."""
    if character is None and len(key) == 1:
        character = key
    return KeyPress(key=key, character=character)


def type_keys(engine, keys: str) -> None:
    for ch in keys:
        dispatch(engine, press(ch))


class TestKeyPress:

    def test_name_prefers_character(self):
        assert press("dollar_sign", "$").name == "$"
        assert press("A").name == "A"

    def test_name_falls_back_to_key(self):
        assert KeyPress("escape").name == "escape"
        assert KeyPress("ctrl+a", "\x01", ctrl=True).name == "ctrl+a"

    def test_is_text(self):
        assert press("a").is_text
        assert press("space", " ").is_text
        assert not KeyPress("escape").is_text
        assert not KeyPress("ctrl+a", "\x01", ctrl=True).is_text

    def test_from_textual_event(self):
        key = KeyPress.from_event(events.Key("a", "a"))
        assert key == KeyPress("a", "a")

        tab = KeyPress.from_event(events.Key("shift+tab", None))
        assert tab.shift
        assert tab.name == "shift+tab"

        ctrl = KeyPress.from_event(events.Key("ctrl+s", "\x13"))
        assert ctrl.ctrl
        assert ctrl.character is None


class TestTables:

    def test_every_operation_exists_on_engine(self):
        for table in (NORMAL_KEYS, INSERT_KEYS, VISUAL_KEYS):
            for operation in table.values():
                if operation in (SEND, CANCEL):
                    continue
                assert callable(getattr(ComposeEngine, operation)), operation

    def test_every_mode_has_a_table(self):
        assert set(KEYMAP) == set(ComposeMode)

    def test_control_keys_are_never_bound(self):
        assert lookup(ComposeMode.NORMAL, KeyPress("ctrl+d", None, ctrl=True)) is None


class TestNormalMode:

    def test_motions(self, body_engine):
        engine = body_engine("hello world")
        dispatch(engine, press("w"))
        assert engine.cursor == 6
        dispatch(engine, press("dollar_sign", "$"))
        assert engine.cursor == 11
        dispatch(engine, press("0"))
        assert engine.cursor == 0
        dispatch(engine, press("l"))
        dispatch(engine, KeyPress("right"))
        assert engine.cursor == 2
        dispatch(engine, press("h"))
        assert engine.cursor == 1

    def test_j_and_k_move_between_fields(self, engine):
        dispatch(engine, press("j"))
        assert engine.field is ComposeField.SUBJECT
        dispatch(engine, KeyPress("down"))
        assert engine.field is ComposeField.BODY
        dispatch(engine, press("k"))
        assert engine.field is ComposeField.SUBJECT

    def test_tab_cycles_fields(self, engine):
        dispatch(engine, KeyPress("tab"))
        assert engine.field is ComposeField.SUBJECT
        dispatch(engine, KeyPress("shift+tab", shift=True))
        dispatch(engine, KeyPress("shift+tab", shift=True))
        assert engine.field is ComposeField.BODY

    def test_edits(self, body_engine):
        engine = body_engine("abc", 1)
        dispatch(engine, press("x"))
        assert engine.text == "ac"
        dispatch(engine, press("greater_than_sign", ">"))
        assert engine.text == "  ac"
        dispatch(engine, press("less_than_sign", "<"))
        assert engine.text == "ac"
        dispatch(engine, press("d"))
        assert engine.text == ""

    @pytest.mark.parametrize("key,character,action", [
        ("colon", ":", SEND),
        ("Z", "Z", SEND),
        ("escape", None, CANCEL),
        ("q", "q", CANCEL),
    ])
    def test_session_actions_are_returned(self, engine, key, character, action):
        assert dispatch(engine, KeyPress(key, character)) == action
        assert engine.mode is ComposeMode.NORMAL

    def test_unbound_keys_do_nothing(self, engine):
        assert dispatch(engine, press("z")) is None
        assert engine.text == ""
        assert engine.cursor == 0


class TestInsertMode:

    def test_typing_inserts_characters(self, engine):
        dispatch(engine, press("i"))
        type_keys(engine, "jq:hé")
        assert engine.text == "jq:hé"
        assert engine.mode is ComposeMode.INSERT

    def test_space_is_typed(self, engine):
        dispatch(engine, press("i"))
        dispatch(engine, press("space", " "))
        assert engine.text == " "

    def test_escape_returns_to_normal(self, engine):
        dispatch(engine, press("i"))
        type_keys(engine, "ab")
        assert dispatch(engine, KeyPress("escape")) is None
        assert engine.mode is ComposeMode.NORMAL
        assert engine.cursor == 2

    def test_backspace_and_enter(self, body_engine):
        engine = body_engine("")
        dispatch(engine, press("i"))
        type_keys(engine, "ab")
        dispatch(engine, KeyPress("enter", "\r"))
        type_keys(engine, "c")
        assert engine.text == "ab\nc"
        dispatch(engine, KeyPress("backspace", "\x08"))
        dispatch(engine, KeyPress("backspace", "\x08"))
        assert engine.text == "ab"

    def test_tab_does_not_switch_fields(self, engine):
        dispatch(engine, press("i"))
        dispatch(engine, KeyPress("tab", "\t"))
        assert engine.field is ComposeField.TO

    def test_control_keys_are_ignored(self, engine):
        dispatch(engine, press("i"))
        dispatch(engine, KeyPress("ctrl+a", "\x01", ctrl=True))
        assert engine.text == ""

    def test_o_opens_line_in_body(self, body_engine):
        engine = body_engine("first")
        dispatch(engine, press("o"))
        type_keys(engine, "second")
        assert engine.text == "first\nsecond"


class TestVisualMode:

    def test_select_and_delete(self, body_engine):
        engine = body_engine("abcdef", 1)
        dispatch(engine, press("v"))
        type_keys(engine, "lll")
        dispatch(engine, press("d"))
        assert engine.text == "aef"
        assert engine.mode is ComposeMode.NORMAL

    def test_escape_cancels_selection(self, body_engine):
        engine = body_engine("abcdef", 1)
        dispatch(engine, press("v"))
        dispatch(engine, press("l"))
        dispatch(engine, KeyPress("escape"))
        assert engine.mode is ComposeMode.NORMAL
        assert engine.anchor is None
        assert engine.text == "abcdef"

    def test_j_moves_within_body(self, body_engine):
        engine = body_engine("ab\ncd", 0)
        dispatch(engine, press("v"))
        dispatch(engine, press("j"))
        assert engine.selection == (0, 3)
