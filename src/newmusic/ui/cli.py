"""
newmusic CLI Module
Command-line interface for building the weekly new releases card.
"""

import argparse
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from ..core.config import PATHS, PROJECT_NAME, PROJECT_VERSION
from ..core.logger import setup_logging
from ..services.ingest_service import IngestService
from ..services.pipeline import run_pipeline
from ..services.record_auditor import RecordAuditor
from .display import DisplayManager


def parse_day(value: str) -> date:
    """argparse type for ISO dates (YYYY-MM-DD)."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


class NewMusicCLI:
    """Main CLI class for the new releases card generator."""

    def __init__(self, display_manager: Optional[DisplayManager] = None):
        self.display_manager = display_manager or DisplayManager()

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog=PROJECT_NAME,
            description=f"{PROJECT_NAME} - weekly new releases card v{PROJECT_VERSION}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  %(prog)s render
  %(prog)s render --catalog input.csv --today 2026-10-16 --output output
  %(prog)s audit --catalog input.csv
  %(prog)s ingest --albums input.txt --catalog input.csv
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'{PROJECT_NAME} {PROJECT_VERSION}'
        )
        parser.add_argument(
            '--log-level',
            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
            help='Override the log level'
        )

        subparsers = parser.add_subparsers(
            dest='mode',
            help='Available modes',
            required=True
        )

        render_parser = subparsers.add_parser(
            'render',
            help='Render the card for releases from the last 7 days'
        )
        render_parser.add_argument(
            '--catalog', '-c',
            type=Path,
            default=PATHS["CATALOG_FILE"],
            help='Catalog CSV file (default: %(default)s)'
        )
        render_parser.add_argument(
            '--today', '-d',
            type=parse_day,
            help='Last day of the window, YYYY-MM-DD (default: today)'
        )
        render_parser.add_argument(
            '--output', '-o',
            type=Path,
            default=PATHS["OUTPUT_DIR"],
            help='Output directory (default: %(default)s)'
        )

        audit_parser = subparsers.add_parser(
            'audit',
            help='Check every catalog row against the field rules'
        )
        audit_parser.add_argument(
            '--catalog', '-c',
            type=Path,
            default=PATHS["CATALOG_FILE"],
            help='Catalog CSV file (default: %(default)s)'
        )

        ingest_parser = subparsers.add_parser(
            'ingest',
            help='Fetch Spotify albums and append them to the catalog'
        )
        ingest_parser.add_argument(
            '--albums', '-a',
            type=Path,
            default=PATHS["ALBUMS_FILE"],
            help='Text file with one Spotify album URL per line (default: %(default)s)'
        )
        ingest_parser.add_argument(
            '--catalog', '-c',
            type=Path,
            default=PATHS["CATALOG_FILE"],
            help='Catalog CSV file (default: %(default)s)'
        )
        ingest_parser.add_argument(
            '--no-audit',
            action='store_true',
            help='Skip the catalog audit after appending'
        )

        return parser

    def run_render(self, args: argparse.Namespace) -> int:
        report = run_pipeline(catalog_path=args.catalog, today=args.today, output_dir=args.output)
        self.display_manager.display_run_report(report)
        return 0

    def run_audit(self, args: argparse.Namespace) -> int:
        report = RecordAuditor().audit_file(args.catalog)
        self.display_manager.display_audit_report(report)
        return 0 if report.ok else 1

    def run_ingest(self, args: argparse.Namespace) -> int:
        count = IngestService().ingest(args.albums, args.catalog)
        self.display_manager.console.print(f"[bold green]✓[/bold green] Appended {count} album(s) to {args.catalog}")
        if count and not args.no_audit:
            return self.run_audit(args)
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Parse arguments and dispatch to the selected mode."""
        parser = self.create_parser()
        args = parser.parse_args(argv)

        if args.log_level:
            setup_logging(args.log_level)

        handlers = {
            'render': self.run_render,
            'audit': self.run_audit,
            'ingest': self.run_ingest,
        }
        return handlers[args.mode](args)
