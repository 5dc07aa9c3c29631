"""Serialization of the note list, current and legacy formats.

Current format: a JSON array of note objects::

    [{"id": "...", "title": "...", "date": "DD/MM/YYYY",
      "content": [{"type": "text", "text": "..."},
                  {"type": "image", "uri": "..."}]}]

Unknown keys are ignored on read. Older arrays are still accepted and flagged
as migrated so the caller writes the upgrade back: arrays without a date
(their notes receive the migration date), blocks tagged with full class names,
and repeated ids (the first note wins).

Legacy format: a set of strings, each either a bare title or
``id;;;title;;;body``.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from agenda.core.models import ContentBlock, ImageBlock, Note, TextBlock, new_note_id
from agenda.storage.kv import KeyValueStore
from agenda.utils.time import today_display

LEGACY_DELIMITER = ";;;"

# Block tags written by the first JSON release of the app, which named each
# variant by its full class name.
LEGACY_BLOCK_TAGS = {
    "com.example.projetoagenda.ContentBlock.TextBlock": "text",
    "com.example.projetoagenda.ContentBlock.ImageBlock": "image",
}


class NoteDecodeError(ValueError):
    """Stored data could not be turned into notes."""


class FormatError(NoteDecodeError):
    """The stored value is not valid current-format data."""


class LegacyFormatError(NoteDecodeError):
    """The stored value is not a legacy string set either."""


@dataclass(frozen=True)
class DecodeResult:
    notes: list[Note]
    migrated: bool


def encode_current(notes: Sequence[Note]) -> str:
    return json.dumps([_encode_note(note) for note in notes], ensure_ascii=False)


def _encode_note(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "title": note.title,
        "content": [_encode_block(block) for block in note.content],
        "date": note.date,
    }


def _encode_block(block: ContentBlock) -> dict[str, str]:
    match block:
        case TextBlock(text=text):
            return {"type": "text", "text": text}
        case ImageBlock(uri=uri):
            return {"type": "image", "uri": uri}
    raise TypeError(f"Unsupported content block: {block!r}")


def decode_current(blob: str, today: str | None = None) -> DecodeResult:
    try:
        raw = json.loads(blob)
    except (TypeError, json.JSONDecodeError) as exc:
        raise FormatError(f"Not valid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise FormatError(f"Expected a list of notes, got {type(raw).__name__}")

    migrated = False
    notes: dict[str, Note] = {}
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise FormatError(f"Note {index} is not an object")
        if "date" not in item:
            # Written before notes carried a date.
            if today is None:
                today = today_display()
            item = {**item, "date": today}
            migrated = True
        note, legacy_tags = _decode_note(item, index)
        migrated = migrated or legacy_tags
        if note.id in notes:
            # A repeated id keeps its first note.
            migrated = True
            continue
        notes[note.id] = note
    return DecodeResult(notes=list(notes.values()), migrated=migrated)


def _decode_note(item: dict[str, Any], index: int) -> tuple[Note, bool]:
    content = item.get("content")
    if not isinstance(content, list):
        raise FormatError(f"Note {index} has no content list")
    blocks = [
        _decode_block(block, f"note {index} block {position}")
        for position, block in enumerate(content)
    ]
    note = Note(
        id=_require_str(item, "id", f"note {index}"),
        title=_require_str(item, "title", f"note {index}"),
        content=tuple(block for block, _ in blocks),
        date=_require_str(item, "date", f"note {index}"),
    )
    return note, any(legacy for _, legacy in blocks)


def _decode_block(block: Any, where: str) -> tuple[ContentBlock, bool]:
    if not isinstance(block, dict):
        raise FormatError(f"{where} is not an object")
    raw_type = block.get("type")
    block_type = raw_type
    if isinstance(raw_type, str):
        block_type = LEGACY_BLOCK_TAGS.get(raw_type, raw_type)
    legacy = block_type != raw_type
    if block_type == "text":
        return TextBlock(_require_str(block, "text", where)), legacy
    if block_type == "image":
        return ImageBlock(_require_str(block, "uri", where)), legacy
    raise FormatError(f"{where} has unknown type {raw_type!r}")


def _require_str(item: dict[str, Any], key: str, where: str) -> str:
    value = item.get(key)
    if not isinstance(value, str):
        raise FormatError(f"{where} is missing string field {key!r}")
    return value


def decode_legacy_v1(entries: Iterable[str], today: str | None = None) -> list[Note]:
    """Convert a legacy string set into notes.

    ``id;;;title;;;body`` keeps its id; a bare string becomes both title and
    body under a fresh id. Every note gets the same date. Entries are read in
    sorted order and a repeated id keeps its first entry.
    """
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
        raise LegacyFormatError(
            f"Expected a set of strings, got {type(entries).__name__}"
        )
    entries = list(entries)
    if not all(isinstance(entry, str) for entry in entries):
        raise LegacyFormatError("Legacy set contains non-string entries")

    date = today or today_display()
    notes: dict[str, Note] = {}
    for entry in sorted(entries):
        note = _decode_legacy_entry(entry, date)
        notes.setdefault(note.id, note)
    return list(notes.values())


def _decode_legacy_entry(entry: str, date: str) -> Note:
    if LEGACY_DELIMITER not in entry:
        return Note(
            id=new_note_id(), title=entry, content=(TextBlock(entry),), date=date
        )
    parts = entry.split(LEGACY_DELIMITER, 2)
    note_id = parts[0] or new_note_id()
    title = parts[1]
    body = parts[2] if len(parts) > 2 else ""
    return Note(id=note_id, title=title, content=(TextBlock(body),), date=date)


DecodeAttempt = Callable[[KeyValueStore, str, str], DecodeResult]


def _attempt_current(store: KeyValueStore, key: str, today: str) -> DecodeResult:
    try:
        blob = store.get_string(key)
    except TypeError as exc:
        raise FormatError(f"No string stored at {key!r}: {exc}") from exc
    if blob is None:
        raise FormatError(f"No string stored at {key!r}")
    return decode_current(blob, today)


def _attempt_legacy_v1(store: KeyValueStore, key: str, today: str) -> DecodeResult:
    try:
        entries = store.get_string_set(key)
    except (TypeError, ValueError) as exc:
        raise LegacyFormatError(f"No string set stored at {key!r}: {exc}") from exc
    if entries is None:
        raise LegacyFormatError(f"No string set stored at {key!r}")
    return DecodeResult(notes=decode_legacy_v1(entries, today), migrated=True)


# Tried in order; the first that does not raise wins.
DECODE_CHAIN: tuple[DecodeAttempt, ...] = (_attempt_current, _attempt_legacy_v1)
