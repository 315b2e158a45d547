"""CLI entrypoints for prcomment commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .stores import ResultStore


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


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prcomment",
        description="Generate pull request descriptions from branch history and a template.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a PR description for the current branch.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "--no-store",
        action="store_true",
        help="Do not record the description as the last result.",
    )

    prompt_parser = subparsers.add_parser(
        "prompt",
        help="Print the rendered prompt without calling the completion API.",
    )
    _add_verbose_option(prompt_parser, suppress_default=True)
    _add_path_argument(prompt_parser)
    prompt_parser.add_argument(
        "--template-file",
        type=Path,
        default=None,
        help="Render this template instead of the configured one.",
    )

    info_parser = subparsers.add_parser(
        "info",
        help="Show the current branch, target branch and ticket.",
    )
    _add_verbose_option(info_parser, suppress_default=True)
    _add_path_argument(info_parser)

    last_parser = subparsers.add_parser(
        "last",
        help="Print the last generated description.",
    )
    _add_verbose_option(last_parser, suppress_default=True)
    _add_path_argument(last_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service (requires the service extra).",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None, orchestrator: Orchestrator | None = None) -> None:
    """CLI entrypoint for prcomment commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "serve":
        try:
            from .service import run_service
        except ModuleNotFoundError as exc:
            parser.exit(1, f"Service mode requires FastAPI and uvicorn: {exc}\n")
        run_service(host=args.host, port=args.port)
        return

    orchestrator = orchestrator or Orchestrator()
    repo_path = Path(args.path).expanduser().resolve()

    try:
        if args.command == "generate":
            store = None
            if not args.no_store:
                store_config = load_config(repo_path).store
                if store_config.enabled:
                    store = ResultStore.for_repo(repo_path, store_config.path)
            result = orchestrator.generate(repo_path, store=store)
            print(result.description)
        elif args.command == "prompt":
            if args.template_file is not None:
                template = args.template_file.read_text(encoding="utf-8")
            else:
                template = load_config(repo_path).resolve_template()
            print(orchestrator.build_prompt(repo_path, template))
        elif args.command == "info":
            info = orchestrator.branch_info(repo_path)
            print(f"Current branch: {info.current_branch}")
            print(f"Target branch: {info.target_branch}")
            print(f"Jira ticket: {info.jira_ticket}")
        elif args.command == "last":
            store_config = load_config(repo_path).store
            latest = ResultStore.for_repo(repo_path, store_config.path).latest()
            if latest is None:
                parser.exit(1, "No description has been generated yet.\n")
            print(latest.description)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except RuntimeError as exc:
        parser.exit(
            1, f"prcomment {args.command} failed: {exc}\nRun with --verbose for more details.\n"
        )


if __name__ == "__main__":
    main(sys.argv[1:])
