"""CLI entrypoints for promptline commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .prompt import Prompt


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    verbose_kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Log detector diagnostics to stderr.",
    }
    config_kwargs: dict[str, object] = {
        "type": Path,
        "help": "Path to promptline.yml (defaults to $PROMPTLINE_CONFIG or ~/.config/promptline.yml).",
    }
    log_file_kwargs: dict[str, object] = {
        "type": Path,
        "help": "Also append diagnostics to this file.",
    }
    if suppress_default:
        verbose_kwargs["default"] = argparse.SUPPRESS
        config_kwargs["default"] = argparse.SUPPRESS
        log_file_kwargs["default"] = argparse.SUPPRESS
    else:
        verbose_kwargs["default"] = False
        config_kwargs["default"] = None
        log_file_kwargs["default"] = None
    parser.add_argument("-v", "--verbose", **verbose_kwargs)
    parser.add_argument("--config", **config_kwargs)
    parser.add_argument("--log-file", **log_file_kwargs)


def _add_plain_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print segments without ANSI styling.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptline",
        description="Render shell prompt segments for project toolchains.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    prompt_parser = subparsers.add_parser(
        "prompt",
        help="Render every enabled module for a directory.",
    )
    _add_common_options(prompt_parser, suppress_default=True)
    _add_plain_option(prompt_parser)
    prompt_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to render for (defaults to current directory).",
    )

    module_parser = subparsers.add_parser(
        "module",
        help="Render a single module by name.",
    )
    _add_common_options(module_parser, suppress_default=True)
    _add_plain_option(module_parser)
    module_parser.add_argument("name", help="Module name, e.g. dotnet.")
    module_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to render for (defaults to current directory).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve prompt renders over HTTP.",
    )
    _add_common_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8765)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for promptline commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port, config_path=args.config)
        return

    try:
        prompt = Prompt(load_config(args.config))
    except (ConfigError, ValueError) as exc:
        parser.exit(1, f"promptline: {exc}\n")

    if args.command == "prompt":
        try:
            text = prompt.render(args.path, plain=args.plain)
        except ConfigError as exc:
            parser.exit(1, f"promptline: {exc}\n")
    elif args.command == "module":
        try:
            text = prompt.render_one(args.name, args.path, plain=args.plain)
        except KeyError:
            parser.exit(1, f"promptline: unknown module '{args.name}'\n")
        except ConfigError as exc:
            parser.exit(1, f"promptline: {exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    sys.stdout.write(text)


if __name__ == "__main__":
    main(sys.argv[1:])
