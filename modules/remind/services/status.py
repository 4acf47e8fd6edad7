"""
Status Title.

Derives the menu-bar title from the active notes: the highest-risk note
(with its due time) or, when the count-only preference is on, the number
of active notes. Colored by the highest risk level.
"""

from dataclasses import dataclass
from datetime import tzinfo

from modules.remind.core.utils import to_local
from modules.remind.models.note import Note

DEFAULT_TITLE = "Remind"
MAX_TITLE_LENGTH = 25
ELLIPSIS = "..."


@dataclass(frozen=True)
class StatusTitle:
    text: str
    color: str | None = None


def build_status_title(
    active_notes: list[Note],
    show_count_only: bool = False,
    tz: tzinfo | None = None,
) -> StatusTitle:
    """
    Build the menu-bar title.

    Args:
        active_notes: Active notes, highest risk first
        show_count_only: Show the active count instead of note text
        tz: Timezone for the due time prefix (local time when None)

    Returns:
        StatusTitle with text and the color of the top note's risk
    """
    if not active_notes:
        return StatusTitle(DEFAULT_TITLE)

    top = active_notes[0]
    color = top.risk.color

    if show_count_only:
        return StatusTitle(str(len(active_notes)), color)

    text = top.text.strip()
    if top.due_date is not None:
        due = to_local(top.due_date)
        if tz is not None:
            due = due.astimezone(tz)
        text = f"{due:%H:%M} - {text}"

    if len(text) > MAX_TITLE_LENGTH:
        text = text[:MAX_TITLE_LENGTH] + ELLIPSIS

    return StatusTitle(text, color)
