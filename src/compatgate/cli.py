"""compatgate CLI: check local schemas against a schema registry."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def _configure_logging(quiet: bool, verbose: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _config_data_from_args(args) -> dict:
    """Merge --config file values with command line overrides."""
    from .config import DEFAULT_INCLUDES, load_config_data

    data = load_config_data(args.config) if args.config else {}

    if args.schemas:
        data["schema_file_sets"] = [
            {
                "directory": str(directory),
                "includes": args.include or list(DEFAULT_INCLUDES),
                "excludes": args.exclude or [],
            }
            for directory in args.schemas
        ]
    if args.imports:
        data["imports"] = [str(p) for p in args.imports]
    if args.subject_pattern is not None:
        data["subject_name_pattern"] = args.subject_pattern
    if args.registry_urls:
        data["schema_registry_urls"] = args.registry_urls
    if args.user_info is not None:
        data["user_info"] = args.user_info
    return data


def main():
    """Main CLI entry point for compatgate commands."""
    try:
        compatgate_version = get_version("compatgate")
    except PackageNotFoundError:
        compatgate_version = "dev"

    parser = argparse.ArgumentParser(
        prog="compatgate",
        description="compatgate: refuse builds whose Avro schemas break schema registry compatibility"
    )
    parser.add_argument("--version", action="version", version=f"compatgate {compatgate_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every file load and registry call."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser(
        "check",
        help="Check local schema files against matching schema registry subjects",
        parents=[parent_parser]
    )
    check_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to JSON config file (command line options override its values)"
    )
    check_parser.add_argument(
        "--schemas",
        type=Path,
        action="append",
        default=None,
        help="Directory containing schema files (repeatable)"
    )
    check_parser.add_argument(
        "--include",
        action="append",
        default=None,
        help="Glob pattern of files to check under each --schemas directory (default: **/*.avsc)"
    )
    check_parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Glob pattern of files to skip under each --schemas directory"
    )
    check_parser.add_argument(
        "--import",
        dest="imports",
        type=Path,
        action="append",
        default=None,
        help="Schema file parsed first so other schemas can reference its types (repeatable, order matters)"
    )
    check_parser.add_argument(
        "--subject-pattern",
        default=None,
        help="Regex extracting the full type name from subject names via a 'schematypefullname' group"
    )
    check_parser.add_argument(
        "--registry-url",
        dest="registry_urls",
        action="append",
        default=None,
        help="Schema registry base URL (repeatable)"
    )
    check_parser.add_argument(
        "--user-info",
        default=None,
        help="Basic auth credentials in 'user:password' format"
    )
    check_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for compatibility_report.json"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "check":
        _configure_logging(args.quiet, args.verbose)
        try:
            from .api import check_compatibility
            from .config import build_config
            from .kernel.errors import CompatibilityCheckError
            from ._internal.canonical_json import canonical_dumps

            config = build_config(_config_data_from_args(args))
            report = check_compatibility(config)

            report_out = None
            if args.output_dir:
                output_dir = Path(args.output_dir).resolve()
                output_dir.mkdir(parents=True, exist_ok=True)
                report_out = output_dir / "compatibility_report.json"
                report_out.write_text(canonical_dumps(report.model_dump()) + "\n", encoding="utf-8")
        except CompatibilityCheckError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if not report.ok:
            print(report.failure_message(), file=sys.stderr)
        if not args.quiet:
            status = "OK" if report.ok else "FAILED"
            print(f"[{status}] Compatibility check complete")
            if report_out is not None:
                print(f"  Report: {report_out}")
            print(f"  Status: {status}")
            print(f"  Files: {len(report.files)}")
            print(f"  Incompatibilities: {len(report.incompatibilities)}")
            print(f"  Warnings: {len(report.warnings)}")
        if not report.ok:
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
