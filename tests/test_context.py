"""
Tests for context extraction and message key normalization.
"""

from window_chat.services import extract_context, normalize_message


def test_normalize_message_trims_and_casefolds():
    assert normalize_message("  Hello World \n") == "hello world"
    assert normalize_message("STRASSE") == normalize_message("straße")


def test_takes_last_two_turns_oldest_first():
    history = ["first", "Second ", " THIRD"]
    assert extract_context(history) == ("second", "third")


def test_short_history():
    assert extract_context([]) == ()
    assert extract_context(["Only one"]) == ("only one",)


def test_order_matters():
    assert extract_context(["a", "b"]) != extract_context(["b", "a"])


def test_custom_turns():
    history = ["a", "b", "c"]
    assert extract_context(history, turns=1) == ("c",)
    assert extract_context(history, turns=5) == ("a", "b", "c")
    assert extract_context(history, turns=0) == ()


def test_history_is_not_modified():
    history = ["  A ", "B"]
    extract_context(history)
    assert history == ["  A ", "B"]
