# Pydantic schemas package
from modules.remind.schemas.note import NoteRecord, dump_notes, load_notes

__all__ = [
    "NoteRecord",
    "dump_notes",
    "load_notes",
]
