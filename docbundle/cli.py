"""CLI entrypoints for docbundle commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import DocBundleError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .tree import iter_leaves, render_tree


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also append log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docbundle",
        description="Bundle source files into a documentation prompt and save the generated Markdown.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    files_parser = subparsers.add_parser("files", help="Show the files offered for documentation.")
    _add_logging_options(files_parser, suppress_default=True)
    files_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Workspace root to scan (defaults to current directory).",
    )
    files_parser.add_argument(
        "--flat",
        action="store_true",
        help="Print one absolute path per line instead of the outline.",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert the documents in a directory into text files.",
    )
    _add_logging_options(convert_parser, suppress_default=True)
    convert_parser.add_argument("directory", help="Directory holding the documents.")
    convert_parser.add_argument(
        "--company",
        default=None,
        help="Only keep plain-text files whose name contains this text.",
    )
    convert_parser.add_argument(
        "--keep-originals",
        action="store_true",
        help="Keep spreadsheets after converting them.",
    )

    tasks_parser = subparsers.add_parser("tasks", help="List the available documentation tasks.")
    _add_logging_options(tasks_parser, suppress_default=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate documentation for the given files.",
    )
    _add_logging_options(generate_parser, suppress_default=True)
    generate_parser.add_argument("files", nargs="+", help="Files to document.")
    generate_parser.add_argument(
        "--task",
        default="testAutomation",
        help="Documentation task key (see `docbundle tasks`).",
    )
    generate_parser.add_argument(
        "--prompt",
        default=None,
        help="Instructions used with the `custom` task.",
    )
    generate_parser.add_argument(
        "--workspace",
        default=".",
        help="Workspace root; documentation is written under it.",
    )

    key_parser = subparsers.add_parser("set-key", help="Store the Gemini API key.")
    _add_logging_options(key_parser, suppress_default=True)
    key_parser.add_argument("value", help="API key value.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument(
        "--workspace",
        default=".",
        help="Workspace root served to clients.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docbundle commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        if args.command == "files":
            orchestrator = Orchestrator(args.path)
            tree = orchestrator.list_files()
            if args.flat:
                output = "\n".join(leaf.path for leaf in iter_leaves(tree))
            else:
                output = render_tree(tree)
            print(output or "No matching files found.")
        elif args.command == "convert":
            orchestrator = Orchestrator(args.directory)
            names = orchestrator.convert_directory(
                args.directory,
                args.company,
                keep_originals=True if args.keep_originals else None,
            )
            for name in names:
                print(name)
        elif args.command == "tasks":
            for task in Orchestrator().tasks():
                print(f"{task.key:<16} {task.name} - {task.description}")
        elif args.command == "generate":
            orchestrator = Orchestrator(args.workspace)
            outcome = orchestrator.generate_documentation(
                [str(Path(item).expanduser().resolve()) for item in args.files],
                args.task,
                args.prompt,
            )
            if outcome is None:
                parser.exit(1, "docbundle generate failed. Run with --verbose for more details.\n")
            print(f"Documentation saved to {_relativize(outcome.path)}")
        elif args.command == "set-key":
            Orchestrator().save_api_key(args.value)
            print("Gemini API key saved")
        elif args.command == "serve":  # pragma: no cover - integration path
            from .service import run_service

            run_service(host=args.host, port=args.port, workspace=args.workspace)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except DocBundleError as exc:
        parser.exit(1, f"docbundle {args.command} failed: {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
