from __future__ import annotations

import uuid

import pytest

from agenda.core.models import ImageBlock, Note, TextBlock, new_note, new_note_id
from agenda.utils.time import parse_display_date


def test_new_note_defaults() -> None:
    note = new_note()
    assert note.title == "New Note"
    assert note.content == (TextBlock(""),)
    assert uuid.UUID(note.id).version == 4
    parse_display_date(note.date)


def test_new_note_ids_are_distinct() -> None:
    assert len({new_note_id() for _ in range(100)}) == 100


def test_note_content_is_stored_as_tuple() -> None:
    note = Note(id="n1", title="T", content=[TextBlock("a")], date="01/02/2024")
    assert note.content == (TextBlock("a"),)
    assert hash(note) == hash(
        Note(id="n1", title="T", content=(TextBlock("a"),), date="01/02/2024")
    )


def test_edits_return_new_values() -> None:
    note = new_note(title="Draft", text="body", date="01/02/2024")
    edited = note.with_title("Final").append_block(ImageBlock("content://media/7"))
    assert note.title == "Draft"
    assert note.content == (TextBlock("body"),)
    assert edited.id == note.id
    assert edited.title == "Final"
    assert edited.content == (TextBlock("body"), ImageBlock("content://media/7"))
    assert note.with_date("03/04/2025").date == "03/04/2025"


def test_replace_text_block() -> None:
    note = new_note(text="old").append_block(ImageBlock("file:///a.png"))
    assert note.replace_text_block(0, "new").content[0] == TextBlock("new")
    with pytest.raises(TypeError):
        note.replace_text_block(1, "text")
    with pytest.raises(IndexError):
        note.replace_text_block(5, "text")


def test_new_note_keeps_explicit_empty_date() -> None:
    assert new_note(date="").date == ""
