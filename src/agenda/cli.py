"""Typer CLI for Agenda."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from agenda.core import collection
from agenda.core.models import ImageBlock, Note, TextBlock, new_note
from agenda.core.settings import load_settings
from agenda.logging_setup import configure_logging
from agenda.storage.db import initialize_db
from agenda.storage.factory import database_path, open_store
from agenda.storage.repos.notes import NoteRepository
from agenda.utils.time import format_display_date, parse_display_date

app = typer.Typer(help="Agenda notes CLI")
console = Console()

notes_app = typer.Typer(help="Notes operations")
config_app = typer.Typer(help="Configuration")
db_app = typer.Typer(help="Database operations")


@notes_app.command("list")
def notes_list() -> None:
    notes = _repository().get_notes()
    for note in notes:
        console.print(f"{note.id} | {escape(note.title)} | {note.date}")


@notes_app.command("show")
def notes_show(note_id: str) -> None:
    note = _require_note(_repository().get_notes(), note_id)
    console.print(
        f"[bold]{escape(note.title)}[/bold] ({note.date})", highlight=False
    )
    for index, block in enumerate(note.content):
        if isinstance(block, TextBlock):
            console.print(f"{index}: {escape(block.text)}", highlight=False)
        else:
            console.print(
                f"{index}: \\[image] {escape(block.uri)}", highlight=False
            )


@notes_app.command("add")
def notes_add(
    title: str = "New Note", text: str = "", date: str | None = None
) -> None:
    repository = _repository()
    notes = repository.get_notes()
    note = new_note(title=title, text=text, date=_checked_date(date))
    repository.save_notes([*notes, note])
    console.print(f"created note {note.id}")


@notes_app.command("edit")
def notes_edit(
    note_id: str, title: str | None = None, date: str | None = None
) -> None:
    repository = _repository()
    notes = repository.get_notes()
    note = _require_note(notes, note_id)
    if title is not None:
        note = note.with_title(title)
    if date is not None:
        note = note.with_date(_checked_date(date))
    repository.save_notes(collection.upsert(notes, note))
    console.print(f"updated note {note.id}")


@notes_app.command("set-text")
def notes_set_text(note_id: str, index: int, text: str) -> None:
    repository = _repository()
    notes = repository.get_notes()
    note = _require_note(notes, note_id)
    try:
        note = note.replace_text_block(index, text)
    except (IndexError, TypeError) as exc:
        console.print(f"[red]cannot set text of block {index}: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    repository.save_notes(collection.upsert(notes, note))
    console.print(f"updated note {note.id}")


@notes_app.command("add-image")
def notes_add_image(note_id: str, uri: str) -> None:
    repository = _repository()
    notes = repository.get_notes()
    note = _require_note(notes, note_id).append_block(ImageBlock(uri))
    repository.save_notes(collection.upsert(notes, note))
    console.print(f"added image to note {note.id}")


@notes_app.command("delete")
def notes_delete(note_id: str) -> None:
    repository = _repository()
    notes = repository.get_notes()
    _require_note(notes, note_id)
    repository.save_notes(collection.remove(notes, note_id))
    console.print(f"deleted note {note_id}")


@config_app.command("show")
def config_show() -> None:
    settings = load_settings()
    console.print(f"data_dir={settings.data_dir}")
    console.print(f"store_backend={settings.store_backend}")
    console.print(f"prefs_name={settings.prefs_name}")
    console.print(f"log_level={settings.log_level}")


@db_app.command("init")
def db_init() -> None:
    settings = load_settings()
    applied = initialize_db(database_path(settings))
    console.print(f"database initialized ({len(applied)} migrations applied)")


app.add_typer(notes_app, name="notes")
app.add_typer(config_app, name="config")
app.add_typer(db_app, name="db")


def _repository() -> NoteRepository:
    settings = load_settings()
    configure_logging(settings.log_level)
    return NoteRepository(open_store(settings))


def _require_note(notes: list[Note], note_id: str) -> Note:
    note = collection.find(notes, note_id)
    if note is None:
        console.print(f"[red]note not found: {note_id}[/red]")
        raise typer.Exit(code=1)
    return note


def _checked_date(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return format_display_date(parse_display_date(value))
    except ValueError as exc:
        console.print(f"[red]{exc}; expected DD/MM/YYYY[/red]")
        raise typer.Exit(code=1) from exc
