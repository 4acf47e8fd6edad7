# Domain models package
from modules.remind.models.note import Note, NoteStatus, RiskLevel

__all__ = [
    "Note",
    "NoteStatus",
    "RiskLevel",
]
