"""
Tests for the catalog audit.
"""

import io
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from newmusic.core.exceptions import CatalogReadError
from newmusic.services.record_auditor import RecordAuditor


HEADER = "artist,name,album_art_url,genres,type,release_date\n"


def audit(text):
    return RecordAuditor().audit(io.StringIO(text))


class TestRecordAuditor:
    """Tests for RecordAuditor.audit."""

    def test_clean_catalog_passes(self):
        report = audit(HEADER + 'A,B,https://i.scdn.co/image/a,"[""Pop""]",Album,16/10/2026\n')

        assert report.ok
        assert report.rows_checked == 1
        assert report.messages() == []

    def test_collects_every_problem(self):
        report = audit(
            HEADER
            + "A,B,cover.jpg,Pop,Album,16/10/2026\n"
            + "A,,https://i.scdn.co/image/a,,,2026-10-16\n"
        )

        assert not report.ok
        assert report.line_issues[2] == ["Invalid album art URL: cover.jpg", "Invalid genres format: Pop"]
        assert report.line_issues[3][0] == "Missing required fields: name"
        assert "Missing type field" in report.line_issues[3]
        assert report.line_issues[3][-1].startswith("Invalid release date:")
        assert report.messages()[0] == "Line 2: Invalid album art URL: cover.jpg"

    def test_column_count_is_strict(self):
        report = audit(HEADER + 'A,B,https://i.scdn.co/image/a,["Jazz","Soul"],Album,16/10/2026\n')

        assert report.line_issues == {2: ["Incorrect number of columns"]}

    def test_bad_header_is_reported(self):
        report = audit("artist,title\n")

        assert len(report.header_issues) == 1
        assert not report.ok

    def test_blank_lines_are_ignored(self):
        report = audit(HEADER + "\n" + 'A,B,,,Album,16/10/2026\n')

        assert report.ok
        assert report.rows_checked == 1

    def test_type_fixes_are_suggested(self):
        report = audit(HEADER + "A,B,,,album,16/10/2026\nC,D,,,Single,16/10/2026\n")

        assert report.ok
        assert report.type_fixes == {2: "Album"}

    def test_audit_file(self, catalog_file):
        report = RecordAuditor().audit_file(catalog_file)

        assert report.rows_checked == 3
        assert set(report.line_issues) == {3, 4}

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(CatalogReadError):
            RecordAuditor().audit_file(temp_dir / "missing.csv")

    def test_oversized_cell_is_audited(self):
        report = audit(HEADER + f'A,B,,"{"Pop," * 50000}",Album,16/10/2026\nC,D,,,Album,16/10/2026\n')

        assert report.rows_checked == 2
        assert list(report.line_issues) == [2]
