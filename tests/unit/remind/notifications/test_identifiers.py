"""
Unit Tests for the Notification Identifier Scheme.
"""

import pytest

from modules.remind.notifications.identifiers import (
    due_identifier,
    high_risk_identifier,
    identifiers_for,
    note_id_from_identifier,
    snooze_identifier,
)

NOTE_ID = "7b1f7f6e-3f4e-4f7e-9a52-5d1e9c0f7d10"


class TestIdentifierConstruction:

    def test_formats(self):
        assert snooze_identifier(NOTE_ID) == NOTE_ID
        assert high_risk_identifier(NOTE_ID) == f"high_risk_{NOTE_ID}"
        assert due_identifier("1h", NOTE_ID) == f"due_1h_{NOTE_ID}"

    def test_identifiers_for_lists_all_variants(self):
        assert identifiers_for(NOTE_ID) == [
            NOTE_ID,
            f"high_risk_{NOTE_ID}",
            f"due_15m_{NOTE_ID}",
            f"due_1h_{NOTE_ID}",
            f"due_3h_{NOTE_ID}",
        ]


class TestNoteIdRecovery:

    @pytest.mark.parametrize("identifier", identifiers_for(NOTE_ID))
    def test_recovers_note_id_from_every_variant(self, identifier):
        assert note_id_from_identifier(identifier) == NOTE_ID

    @pytest.mark.parametrize(
        "identifier",
        ["", "high_risk_", "due_15m_not-a-uuid", "garbage", "high_risk"],
    )
    def test_malformed_returns_none(self, identifier):
        assert note_id_from_identifier(identifier) is None
