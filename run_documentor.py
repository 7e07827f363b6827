#!/usr/bin/env python3
"""
Generate CSV documentation for C# EventSource classes.

Each source file containing a class derived from EventSource produces
``<EventSourceName>.csv`` in the output directory, one row per [Event] method.

Usage:
    python run_documentor.py --project-dir ./MyLib --sources Logging/AppEventSource.cs
    python run_documentor.py --source-dir ./MyLib --output-dir docs/events
    python run_documentor.py --source-dir ./MyLib --config eventdoc.yml --strict-config
"""

import argparse
import logging
import os
import sys

from core.config_loader import ConfigValidationError
from core.run_artifacts import build_run_report, write_run_report
from core.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="EventSource documentation generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_documentor.py --project-dir ./MyLib --sources Log.cs\n"
            "  python run_documentor.py --source-dir ./MyLib --output-dir docs/events\n"
        )
    )

    inputs = parser.add_mutually_exclusive_group(required=True)
    inputs.add_argument(
        "--sources",
        nargs="+",
        help="Source files to document, relative to --project-dir."
    )
    inputs.add_argument(
        "--source-dir",
        help="Directory searched recursively for C# source files."
    )
    parser.add_argument(
        "--project-dir",
        default=".",
        help="Directory --sources are relative to. Default: current directory"
    )
    parser.add_argument(
        "--output-dir",
        default="output/eventsource_docs",
        help="Directory receiving generated CSV files. Default: output/eventsource_docs"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML/JSON file overriding recognised names and defaults."
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=False,
        help="Fail on any configuration problem instead of using defaults."
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=False,
        help="Stop at the first file that cannot be documented."
    )
    parser.add_argument(
        "--report-dir",
        default="output/run_reports",
        help="Directory for the JSON run report. Default: output/run_reports"
    )

    return parser.parse_args()


def main() -> None:
    """Main entry point for the documentor."""
    configure_structured_logging(level=logging.INFO)
    args = parse_args()
    run_id = set_run_id()

    from documentor.extractor import discover_source_files, document_sources
    from documentor.settings import load_documentor_settings

    try:
        settings = load_documentor_settings(args.config, strict=args.strict_config)

        if args.source_dir:
            if not os.path.isdir(args.source_dir):
                raise FileNotFoundError(f"Source directory not found: {args.source_dir}")
            project_dir = args.source_dir
            sources = discover_source_files(args.source_dir, settings.source_extensions)
        else:
            project_dir = args.project_dir
            sources = args.sources

        result = document_sources(
            sources=sources,
            project_dir=project_dir,
            output_dir=args.output_dir,
            settings=settings,
            continue_on_error=not args.fail_fast,
        )
        report = build_run_report(
            "success",
            generated_files=result.generated_files,
            stats=result.stats.to_dict(),
        )
        report_path = write_run_report(report, run_id, args.report_dir)
        logger.info("Run report written: %s", report_path)

    except ConfigValidationError as e:
        write_run_report(build_run_report("failed", error=str(e)), run_id, args.report_dir)
        logger.error("Configuration error: %s", e)
        sys.exit(1)
    except FileNotFoundError as e:
        write_run_report(build_run_report("failed", error=str(e)), run_id, args.report_dir)
        logger.error("File error: %s", e)
        sys.exit(1)
    except Exception as e:
        write_run_report(build_run_report("failed", error=str(e)), run_id, args.report_dir)
        logger.error("Documentation run failed: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
