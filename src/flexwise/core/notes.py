"""Klassenbuch lesson-note headers - pure text formatting and parsing."""

from dataclasses import dataclass
from datetime import datetime

from .abbreviations import register_abbreviation

NOTE_HEADER = "**Klassenbuch-Eintrag**\n("
COMPACT_HEADER = "**Klassenbuch-Eintrag:**\n"
LEGACY_HEADER = "Klassenbuch-Eintrag\n"


def format_timestamp(dt: datetime) -> str:
    """Format as "20.08.2024, 17:39"."""
    return dt.strftime("%d.%m.%Y, %H:%M")


def format_compact_timestamp(dt: datetime) -> str:
    """Format as "20.08.24, 17:39"."""
    return dt.strftime("%d.%m.%y, %H:%M")


@dataclass(frozen=True)
class ParsedNote:
    content: str
    metadata: str
    has_metadata: bool


def create_lesson_note(
    content: str,
    created_by: str,
    created_at: str,
    edited_by: str | None = None,
    edited_at: str | None = None,
) -> str:
    """
    Prefix a lesson note with its author header.

    Timestamps use the "dd.mm.yy, HH:MM" form. If the last edit happened on
    the creation date only the edit time is shown.
    """
    metadata = f"{NOTE_HEADER}{register_abbreviation(created_by)}: {created_at}"

    if edited_by and edited_at:
        editor = register_abbreviation(edited_by)
        if created_at.split(",")[0] == edited_at.split(",")[0]:
            _, _, edited_time = edited_at.partition(", ")
            metadata += f"; zuletzt: {editor} {edited_time}"
        else:
            metadata += f"; zuletzt: {editor} {edited_at}"

    return f"{metadata})\n\n{content}"


def parse_lesson_note(note: str | None) -> ParsedNote:
    """Split a stored note into header and body. Handles all header versions."""
    if not note:
        return ParsedNote(content="", metadata="", has_metadata=False)

    if note.startswith(NOTE_HEADER) or note.startswith(COMPACT_HEADER):
        end = note.find("\n\n")
        if end != -1:
            return ParsedNote(content=note[end + 2 :], metadata=note[:end], has_metadata=True)

    if note.startswith(LEGACY_HEADER):
        end = note.find(":\n\n")
        if end != -1:
            return ParsedNote(content=note[end + 3 :], metadata=note[: end + 1], has_metadata=True)

    return ParsedNote(content=note, metadata="", has_metadata=False)
