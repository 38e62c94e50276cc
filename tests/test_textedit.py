import pytest

from renderkit.textedit import Key, TextEditState
from renderkit.textlayout import PlainText


def _press(state, text, *keys):
    for key in keys:
        state.key(text, key)


def _editor(content="", *keys, single_line=False, max_length=None):
    text = PlainText(content) if max_length is None else PlainText(content, max_length=max_length)
    state = TextEditState(single_line=single_line)
    _press(state, text, *keys)
    return text, state


def test_typing_inserts_characters():
    text, state = _editor("", *"hello")
    assert (str(text), state.cursor) == ("hello", 5)


def test_undo_and_redo_round_trip():
    text, state = _editor("", *"abc", *[Key.UNDO] * 3)
    assert (str(text), state.cursor) == ("", 0)
    _press(state, text, *[Key.REDO] * 3)
    assert (str(text), state.cursor) == ("abc", 3)


def test_undo_with_no_history_keeps_text():
    text, state = _editor("abc", Key.TEXTEND, Key.UNDO)
    assert (str(text), state.cursor) == ("abc", 3)


def test_backspace_and_delete():
    text, state = _editor("abc", Key.TEXTEND, Key.BACKSPACE)
    assert str(text) == "ab"
    _press(state, text, Key.TEXTSTART, Key.DELETE)
    assert (str(text), state.cursor) == ("b", 0)


def test_shift_left_selection_and_cut():
    text, state = _editor("abc", Key.TEXTEND, Key.LEFT | Key.SHIFT, Key.LEFT | Key.SHIFT)
    assert state.has_selection()
    assert state.cut(text) is True
    assert (str(text), state.cursor) == ("a", 1)
    assert state.cut(text) is False


def test_paste_replaces_selection_and_undoes():
    text, state = _editor("abc", Key.TEXTSTART, Key.TEXTEND | Key.SHIFT)
    assert state.paste(text, "xyz") is True
    assert (str(text), state.cursor) == ("xyz", 3)
    _press(state, text, Key.UNDO, Key.UNDO)
    assert str(text) == "abc"


def test_paste_rejected_when_too_long():
    text, state = _editor("ab", Key.TEXTEND, max_length=3)
    assert state.paste(text, "xyz") is False
    assert str(text) == "ab"
    assert state.undo_state.undo_point == 0


def test_single_line_ignores_newline():
    text, _ = _editor("", *"a\nb", single_line=True)
    assert str(text) == "ab"


def test_insert_mode_overwrites():
    text, state = _editor("abc", Key.INSERT)
    assert state.insert_mode is True
    _press(state, text, Key.TEXTSTART, "X")
    assert str(text) == "Xbc"
    _press(state, text, Key.UNDO)
    assert str(text) == "abc"


@pytest.mark.parametrize(
    "content, keys, single_line, expected",
    [
        ("ab\ncd", [Key.TEXTEND, Key.LINESTART], False, 3),
        ("ab\ncd", [Key.TEXTEND, Key.LINESTART, Key.LINEEND], False, 5),
        ("abc\ndef", [Key.TEXTSTART, Key.RIGHT], False, 1),
        ("abc\ndef", [Key.TEXTSTART, Key.RIGHT, Key.DOWN], False, 5),
        ("abc\ndef", [Key.TEXTSTART, Key.RIGHT, Key.DOWN, Key.UP], False, 1),
        ("abc\ndef", [Key.TEXTEND, Key.DOWN], False, 7),
        ("abc", [Key.TEXTSTART, Key.DOWN], True, 1),
        ("abc", [Key.TEXTSTART, Key.DOWN, Key.UP], True, 0),
        ("foo bar baz", [Key.TEXTSTART, Key.WORDRIGHT], False, 4),
        ("foo bar baz", [Key.TEXTSTART, Key.WORDRIGHT, Key.WORDRIGHT], False, 8),
        ("foo bar baz", [Key.TEXTSTART, Key.WORDRIGHT, Key.WORDRIGHT, Key.WORDLEFT], False, 4),
    ],
)
def test_cursor_movement(content, keys, single_line, expected):
    _, state = _editor(content, *keys, single_line=single_line)
    assert state.cursor == expected


@pytest.mark.parametrize(
    "content, keys, expected",
    [
        ("ab\ncd", [Key.TEXTSTART, Key.LINEEND | Key.SHIFT], (0, 2)),
        ("foo bar baz", [Key.TEXTSTART, Key.WORDRIGHT, Key.WORDLEFT | Key.SHIFT], (4, 0)),
    ],
)
def test_shift_selection(content, keys, expected):
    _, state = _editor(content, *keys)
    assert (state.select_start, state.select_end) == expected


def test_page_down_moves_several_rows():
    content = "a\nb\nc"
    text, state = _editor(content)
    state.row_count_per_page = 2
    _press(state, text, Key.TEXTSTART, Key.PGDOWN)
    assert state.cursor == content.rindex("\n") + 1


def test_click_places_cursor():
    text, state = _editor("abc\ndef")
    state.click(text, 1.2, 1.5)
    assert state.cursor == 5
    assert not state.has_selection()


def test_drag_extends_selection():
    text, state = _editor("abcdef")
    state.click(text, 0.0, 0.5)
    state.drag(text, 2.0, 0.5)
    assert (state.select_start, state.select_end, state.cursor) == (0, 2, 2)


def test_select_all_and_backspace():
    text, state = _editor("hello", Key.TEXTSTART, Key.TEXTEND | Key.SHIFT, Key.BACKSPACE)
    assert (str(text), state.cursor) == ("", 0)


def test_clear_resets_state():
    text, state = _editor("", *"abc")
    state.clear(single_line=True)
    assert (state.cursor, state.single_line) == (0, True)
    _press(state, text, Key.UNDO)
    assert str(text) == "abc"


def test_multi_character_string_key_rejected():
    text, state = _editor()
    with pytest.raises(ValueError):
        state.key(text, "ab")