# tests/test_export.py

"""
Export Formatter Tests - partner CSV export and data backup
"""

import json
from datetime import datetime, timezone

from partner_rating.models.enumerations import PartnerScope, Rating
from partner_rating.services.export import (
    CSV_HEADER,
    backup_to_csv,
    build_backup,
    escape_csv,
    to_csv,
)

CREATED = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def _partner(partner_id="p1", **overrides):
    row = {
        "id": partner_id,
        "scope": PartnerScope.DOMESTIC,
        "country": "Korea",
        "name": "Kim",
        "org": "Hanbit",
        "email": None,
        "phone": None,
        "created_at": CREATED,
    }
    row.update(overrides)
    return row


class TestEscapeCsv:

    def test_quotes_are_doubled(self):
        assert escape_csv('He said "hi"') == '"He said ""hi"""'

    def test_none_is_empty_quoted(self):
        assert escape_csv(None) == '""'

    def test_numbers_are_stringified(self):
        assert escape_csv(60) == '"60"'


class TestToCsv:

    def test_header_only_for_no_partners(self):
        assert to_csv([], {}) == ",".join(CSV_HEADER)

    def test_one_line_per_partner(self):
        partners = [_partner("p1"), _partner("p2"), _partner("p3")]
        lines = to_csv(partners, {}).split("\n")
        assert len(lines) == 1 + 3
        assert lines[0] == "id,scope,country,name,org,email,phone,createdAt,latestScore,latestRating,latestMemo"

    def test_row_with_latest_evaluation(self):
        latest = {"p1": {"total_score": 60.0, "rating": Rating.OK, "note": "fine"}}
        line = to_csv([_partner("p1")], latest).split("\n")[1]
        assert line == (
            '"p1","domestic","Korea","Kim","Hanbit","","",'
            '"2024-03-01T09:30:00+00:00","60","Fair partner","fine"'
        )

    def test_row_without_evaluation_has_empty_score_fields(self):
        line = to_csv([_partner("p1")], {}).split("\n")[1]
        assert line.endswith('"","",""')

    def test_fractional_score_kept(self):
        latest = {"p1": {"total_score": 65.2, "rating": Rating.OK, "note": None}}
        line = to_csv([_partner("p1")], latest).split("\n")[1]
        assert '"65.2"' in line

    def test_embedded_quotes_escaped(self):
        line = to_csv([_partner("p1", name='He said "hi"')], {}).split("\n")[1]
        assert '"He said ""hi"""' in line

    def test_partner_order_preserved(self):
        partners = [_partner("b"), _partner("a")]
        lines = to_csv(partners, {}).split("\n")
        assert lines[1].startswith('"b"')
        assert lines[2].startswith('"a"')


class TestBackup:

    def test_backup_is_json_serialisable(self):
        evaluation = {
            "id": "e1",
            "partner_id": "p1",
            "scope": PartnerScope.OVERSEAS,
            "version": 1,
            "answers_common": [3] * 15,
            "answers_overseas": [3] * 8,
            "total_score": 60.0,
            "rating": Rating.OK,
            "note": None,
            "created_at": CREATED,
        }
        backup = build_backup([_partner()], [evaluation], exported_by="admin@example.com", exported_at=CREATED)
        text = json.dumps(backup)

        assert backup["exportedAt"] == "2024-03-01T09:30:00+00:00"
        assert backup["exportedBy"] == "admin@example.com"
        assert backup["evaluations"][0]["rating"] == "OK"
        assert backup["partners"][0]["scope"] == "domestic"
        assert "2024-03-01T09:30:00+00:00" in text

    def test_backup_csv_sections(self):
        backup = build_backup([_partner()], [], exported_by="admin@example.com", exported_at=CREATED)
        lines = backup_to_csv(backup).split("\n")

        assert lines[0] == "=== PARTNERS ==="
        assert lines[1].startswith("id,scope,")
        assert "=== EVALUATIONS ===" in lines
        assert lines[-2] == "Exported at: 2024-03-01T09:30:00+00:00"
        assert lines[-1] == "Exported by: admin@example.com"

    def test_backup_csv_flattens_answer_lists(self):
        evaluation = {"id": "e1", "answers_common": [1, 2, 3]}
        backup = build_backup([], [evaluation], exported_by=None, exported_at=CREATED)
        text = backup_to_csv(backup)
        assert '"1 2 3"' in text
