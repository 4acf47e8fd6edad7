"""
Note Schemas.

Pydantic schemas for the persisted note records. The stored form is a
JSON array of NoteRecord objects kept under a single storage key.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter

from modules.remind.core.utils import to_naive_utc
from modules.remind.models.note import Note, NoteStatus, RiskLevel

# Stored timestamps may carry an offset (e.g. a trailing "Z"); the
# application compares naive UTC values only.
UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


class NoteRecord(BaseModel):
    """Schema for one persisted note."""

    id: str = Field(min_length=1, description="Note unique identifier")
    text: str = Field(description="Display text")
    risk: RiskLevel = Field(description="Risk level 1-5")
    status: NoteStatus = Field(description="active, completed or snoozed")
    created_at: UtcDatetime = Field(description="Creation timestamp")
    completed_at: UtcDatetime | None = Field(default=None, description="Completion timestamp")
    due_date: UtcDatetime | None = Field(default=None, description="Due date")
    snooze_until: UtcDatetime | None = Field(default=None, description="Snooze wake time")

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    def to_note(self) -> Note:
        """Build the domain entity from this record."""
        return Note(
            id=self.id,
            text=self.text,
            risk=self.risk,
            status=self.status,
            created_at=self.created_at,
            completed_at=self.completed_at,
            due_date=self.due_date,
            snooze_until=self.snooze_until,
        )


_records_adapter = TypeAdapter(list[NoteRecord])


def dump_notes(notes: list[Note]) -> list[dict[str, Any]]:
    """Serialize notes to JSON-compatible records."""
    records = [NoteRecord.model_validate(note) for note in notes]
    return _records_adapter.dump_python(records, mode="json")


def load_notes(payload: Any) -> list[Note]:
    """
    Deserialize notes from stored records.

    Accepts the record list itself or its JSON text.

    Raises:
        pydantic.ValidationError: If the payload is not a valid record array
    """
    if isinstance(payload, (str, bytes)):
        records = _records_adapter.validate_json(payload)
    else:
        records = _records_adapter.validate_python(payload)
    return [record.to_note() for record in records]
