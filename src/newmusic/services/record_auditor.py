"""
Offline catalog audit.

Checks every row of a catalog against the shared field rules and reports
all problems at once instead of stopping at the first one.
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

from ..core.config import CATALOG_COLUMNS
from ..core.exceptions import CatalogReadError
from ..core.validation import DAY_FIRST, DateParsePolicy, normalize_release_type, summarize_issues, validate_record
from .record_parser import raise_field_limit, validate_header

logger = logging.getLogger(__name__)


@dataclass
class AuditReport:
    """Issues found in a catalog, keyed by line number."""
    header_issues: List[str] = field(default_factory=list)
    line_issues: Dict[int, List[str]] = field(default_factory=dict)
    rows_checked: int = 0
    type_fixes: Dict[int, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.header_issues and not self.line_issues

    def messages(self) -> List[str]:
        return self.header_issues + summarize_issues(self.line_issues)


class RecordAuditor:
    """Audits catalog rows with the same rules the parser relies on."""

    def __init__(self, date_policy: DateParsePolicy = DAY_FIRST):
        self.date_policy = date_policy

    def audit(self, stream: Iterable[str]) -> AuditReport:
        """
        Audit a catalog stream.

        Args:
            stream: Text lines of the catalog, header first

        Returns:
            AuditReport

        Raises:
            CatalogReadError: If the stream cannot be read as CSV
        """
        report = AuditReport()
        raise_field_limit()
        try:
            reader = csv.reader(stream)
            try:
                validate_header(next(reader, None))
            except CatalogReadError as e:
                report.header_issues.append(str(e))

            for cells in reader:
                if not cells or all(not cell.strip() for cell in cells):
                    continue
                line = reader.line_num
                report.rows_checked += 1

                if len(cells) != len(CATALOG_COLUMNS):
                    report.line_issues[line] = ["Incorrect number of columns"]
                    continue

                fields = {column: cell.strip() for column, cell in zip(CATALOG_COLUMNS, cells)}
                issues = validate_record(fields, self.date_policy)
                if issues:
                    report.line_issues[line] = issues

                normalized = normalize_release_type(fields["type"])
                if normalized and normalized != fields["type"]:
                    report.type_fixes[line] = normalized
        except (csv.Error, UnicodeDecodeError) as e:
            raise CatalogReadError(f"Catalog is unreadable: {e}") from e

        if report.ok:
            logger.info(f"Catalog validation passed ({report.rows_checked} rows)")
        else:
            for message in report.messages():
                logger.error(message)
        return report

    def audit_file(self, path: Path) -> AuditReport:
        try:
            with open(path, "r", encoding="utf-8-sig", newline="") as handle:
                return self.audit(handle)
        except OSError as e:
            raise CatalogReadError(f"Cannot read catalog {path}: {e}") from e
