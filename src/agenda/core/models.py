"""Note and content block value types."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, replace

from agenda.utils.time import today_display


@dataclass(frozen=True)
class TextBlock:
    text: str


@dataclass(frozen=True)
class ImageBlock:
    """Reference to an image; the uri is stored as given and never opened."""

    uri: str


ContentBlock = TextBlock | ImageBlock


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: tuple[ContentBlock, ...]
    date: str

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so notes stay hashable.
        if not isinstance(self.content, tuple):
            object.__setattr__(self, "content", tuple(self.content))

    def with_title(self, title: str) -> Note:
        return replace(self, title=title)

    def with_content(self, content: Sequence[ContentBlock]) -> Note:
        return replace(self, content=tuple(content))

    def with_date(self, date: str) -> Note:
        return replace(self, date=date)

    def append_block(self, block: ContentBlock) -> Note:
        return replace(self, content=(*self.content, block))

    def replace_text_block(self, index: int, text: str) -> Note:
        """Return a copy whose text block at ``index`` holds ``text``.

        Raises IndexError for an out-of-range index and TypeError when the
        block at ``index`` is an image.
        """
        block = self.content[index]
        if not isinstance(block, TextBlock):
            raise TypeError(f"Block {index} is not a text block")
        content = list(self.content)
        content[index] = TextBlock(text)
        return replace(self, content=tuple(content))


def new_note_id() -> str:
    return str(uuid.uuid4())


def new_note(
    title: str = "New Note", text: str = "", date: str | None = None
) -> Note:
    return Note(
        id=new_note_id(),
        title=title,
        content=(TextBlock(text),),
        date=date if date is not None else today_display(),
    )
