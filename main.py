#!/usr/bin/env python3
"""
athens-logseq - Athens to Logseq exporter

Main entry point. Reads an Athens (Datascript) snapshot and writes it as a
Logseq directory of journals/ and pages/ Markdown files. Prints nothing on
success; failures are logged to stderr and exit with status 1.
"""

import logging
import sys
import argparse
from typing import List, Optional

from athens_logseq import __version__
from athens_logseq.config import ConfigManager, get_config
from athens_logseq.exceptions import ExportError
from athens_logseq.export import export
from athens_logseq.models import ExportReport


def setup_logging(settings: ConfigManager, verbose: bool = False):
    """Configure logging for the application."""
    level_name = "INFO" if verbose else settings.get("logging.level", "WARNING")
    level = getattr(logging, str(level_name).upper(), logging.WARNING)
    format_str = settings.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_filename:
        handlers.append(logging.FileHandler(settings.log_filename, encoding='utf-8'))

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=handlers,
        force=True
    )


def log_report_problems(report: ExportReport):
    """Log every page that failed, so the run's diagnostics name them."""
    for failure in report.failures:
        logging.error(f"Not exported: '{failure.title}' -> {failure.path}: {failure.error}")


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Export an Athens database as a Logseq Markdown directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  athens-logseq index.json ~/logseq-graph          # Export a JSON snapshot
  athens-logseq db.edn ~/logseq-graph              # Export an EDN snapshot (needs edn-format)
  athens-logseq db.edn out --config config.yaml -v # Custom config, progress on stderr
        """
    )

    parser.add_argument(
        "source",
        help="Path to the Athens database snapshot (.json or .edn)"
    )

    parser.add_argument(
        "output",
        help="Root directory of the Logseq graph to write"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a YAML configuration file (default: ./config.yaml)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"athens-logseq {__version__}"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)
    settings = ConfigManager(args.config) if args.config else get_config()
    setup_logging(settings, args.verbose)
    if args.config and not settings.config_path.exists():
        logging.warning(f"Configuration file not found: {settings.config_path}; using defaults")

    logging.info(f"Exporting {args.source} to {args.output}")

    try:
        report = export(args.source, args.output, settings)

    except KeyboardInterrupt:
        logging.error("Export interrupted by user")
        sys.exit(1)

    except (ExportError, ImportError) as e:
        logging.error(f"Export failed: {e}")
        sys.exit(1)

    if not report.success:
        log_report_problems(report)
        logging.error(f"{len(report.failures)} of {len(report.failures) + report.files_written} pages failed to export")
        sys.exit(1)


if __name__ == "__main__":
    main()
