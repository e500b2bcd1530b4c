"""CLI entrypoints for minicomp commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import APP_TYPES, ConfigError, load_config
from .logging import configure_logging
from .pipeline import BuildPipeline


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minicomp",
        description="Resolve component usages and rewrite component descriptors.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Analyse components under the source directory and rewrite their descriptors.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    build_parser.add_argument(
        "--app-type",
        choices=APP_TYPES,
        default=None,
        help="Override the target app type from .minicomp.yml.",
    )
    build_parser.add_argument(
        "--out",
        default=None,
        help="Output directory (defaults to output_dir from .minicomp.yml).",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print rewritten descriptors without writing any files.",
    )
    build_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write build logs (including debug output with --verbose) to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for minicomp commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(log_file).resolve() if log_file else None,
    )

    if args.command == "build":
        try:
            config = load_config(Path(args.path), app_type=args.app_type)
            pipeline = BuildPipeline(config)
            report = pipeline.run()
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except RuntimeError as exc:
            parser.exit(1, f"minicomp build failed: {exc}\nRun with --verbose for more details.\n")

        if getattr(args, "dry_run", False):
            for full_path in report.rewritten:
                print(f"--- {_relativize(Path(full_path))}")
                print(report.outputs[full_path])
            if not report.rewritten:
                print("No descriptors rewritten (dry-run)")
            return

        output_dir = Path(args.out).resolve() if args.out else None
        written = pipeline.write(report, output_dir)
        print(
            f"Built {len(report.components)} components, "
            f"rewrote {len(report.rewritten)} descriptors, wrote {written} files"
        )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
