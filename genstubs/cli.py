"""CLI entrypoints for genstubs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import GenerationError, Orchestrator


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only report warnings and errors.",
    )


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root holding .genstubs.yml (defaults to current directory).",
    )
    parser.add_argument(
        "-m",
        "--module",
        dest="modules",
        action="append",
        default=[],
        metavar="MODULE",
        help="Import MODULE before inspecting classes (repeatable).",
    )
    parser.add_argument(
        "--compiler",
        dest="compilers",
        action="append",
        default=None,
        metavar="NAME",
        help="Run only the named compiler (repeatable).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genstubs",
        description="Generate .pyi stubs for dynamically declared generator members.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate stubs for every candidate class.",
    )
    _add_verbosity_options(generate_parser, suppress_default=True)
    _add_project_arguments(generate_parser)
    generate_parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for generated stubs (defaults to typings/genstubs).",
    )
    generate_parser.add_argument(
        "--check",
        action="store_true",
        help="Fail when generated stubs on disk are out of date instead of writing them.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List the classes each compiler would generate stubs for.",
    )
    _add_verbosity_options(list_parser, suppress_default=True)
    _add_project_arguments(list_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service (requires the service extra).",
    )
    _add_verbosity_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for genstubs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    orchestrator = Orchestrator()

    if args.command == "generate":
        try:
            result = orchestrator.run(
                args.path,
                modules=args.modules,
                output_dir=args.output_dir,
                check=bool(args.check),
                enabled=args.compilers,
            )
        except (FileNotFoundError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, GenerationError) as exc:
            parser.exit(1, f"genstubs generate failed: {exc}\nRun with --verbose for more details.\n")

        for failure in result.failures:
            print(f"error: {failure.class_name}: {failure.message}", file=sys.stderr)
        if result.check is not None:
            if result.check.ok:
                print(f"Stubs in {_relativize(result.output_dir)} are up to date")
            else:
                for path in [*result.check.stale, *result.check.missing, *result.check.obsolete]:
                    print(f"out of date: {_relativize(path)}")
                print("Run `genstubs generate` to refresh the stubs.")
        else:
            print(f"Generated {len(result.files)} stub file(s) in {_relativize(result.output_dir)}")
        if not result.ok:
            parser.exit(1)
    elif args.command == "list":
        try:
            pairs = orchestrator.list_candidates(
                args.path, modules=args.modules, enabled=args.compilers
            )
        except (FileNotFoundError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, GenerationError) as exc:
            parser.exit(1, f"genstubs list failed: {exc}\nRun with --verbose for more details.\n")
        for compiler_name, class_name in pairs:
            print(f"{compiler_name}\t{class_name}")
    elif args.command == "serve":
        try:
            from .service.app import run_service
        except ModuleNotFoundError as exc:
            parser.exit(
                1,
                f"Service mode is unavailable ({exc}). Install it with `pip install genstubs[service]`.\n",
            )
        try:
            run_service(host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
