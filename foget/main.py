"""foget command line."""

from __future__ import annotations

import argparse
import logging
import sys

from foget.core import logging as core_logging
from foget.core import runner
from foget.core import ui as core_ui
from foget.core.config import OutputConfig, load_settings, output_config
from foget.core.errors import ArgumentError, EmptyArgument, FogetError, NotEnoughArguments, UnknownAction
from foget.core.operations import Action, Request

log = core_logging.get_logger(__name__)

EPILOG = (
    "Examples:\n"
    "  foget add ls \"list directory contents\"\n"
    "  foget mod ls \"show hidden with -a\"\n"
    "  foget search hidden\n"
    "  foget --descriptions ./unix.toml show ls\n"
    "  foget delete ls \"show hidden with -a\"\n"
)

ACTION_ALIASES: dict[str, list[str]] = {
    "add": ["a"],
    "modify": ["m", "mod"],
    "delete": ["d", "del"],
    "show": ["s", "sho", "sh"],
    "search": ["se"],
    "help": ["h"],
}


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises instead of exiting on bad input."""

    def error(self, message: str) -> None:  # type: ignore[override]
        if "invalid choice" in message:
            raise UnknownAction(message)
        if "required" in message:
            raise NotEnoughArguments(message)
        raise ArgumentError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="foget",
        description="Personal command reference: tag shell commands and search them later.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--no-color", action="store_true", help="disable coloured output")
    parser.add_argument("--descriptions", metavar="PATH", help="descriptions database to use")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    sub = parser.add_subparsers(dest="action", metavar="ACTION", required=True)

    p = sub.add_parser("add", aliases=ACTION_ALIASES["add"], help="add a command or a new tag to it")
    p.add_argument("command")
    p.add_argument("tag")

    p = sub.add_parser("modify", aliases=ACTION_ALIASES["modify"], help="append a tag to an existing command")
    p.add_argument("command")
    p.add_argument("tag")

    p = sub.add_parser("delete", aliases=ACTION_ALIASES["delete"], help="delete a command, or one of its tags")
    p.add_argument("command")
    p.add_argument("tag", nargs="?")

    p = sub.add_parser("show", aliases=ACTION_ALIASES["show"], help="list the tags of a command")
    p.add_argument("command")

    p = sub.add_parser("search", aliases=ACTION_ALIASES["search"], help="find commands whose tags contain a substring")
    p.add_argument("substring")

    sub.add_parser("help", aliases=ACTION_ALIASES["help"], help="show this message")
    return parser


def canonical_action(name: str) -> str:
    for action, aliases in ACTION_ALIASES.items():
        if name == action or name in aliases:
            return action
    raise UnknownAction(name)


def to_request(args: argparse.Namespace) -> Request:
    """Build the typed request; empty command names and tags are rejected here."""
    action = Action(canonical_action(args.action))
    if action is Action.SEARCH:
        return Request(action, query=args.substring)
    if not args.command:
        raise EmptyArgument("command name")
    tag = getattr(args, "tag", None)
    if tag is not None and not tag:
        raise EmptyArgument("tag")
    return Request(action, command=args.command, tag=tag)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        settings = load_settings()
    except FogetError as exc:
        core_ui.render_error(exc, core_ui.make_console(OutputConfig(), stderr=True))
        return exc.exit_code
    err_console = core_ui.make_console(output_config(settings), stderr=True)

    try:
        args = parser.parse_args(argv)
    except ArgumentError as exc:
        core_ui.render_error(exc, err_console, parser.format_usage())
        return exc.exit_code
    except SystemExit as exc:
        # -h/--help print usage and exit through argparse
        return int(exc.code or 0)

    out_cfg = output_config(settings, no_color_flag=args.no_color)
    err_console = core_ui.make_console(out_cfg, stderr=True)
    core_logging.configure(logging.DEBUG if args.verbose else settings.log_level)

    try:
        if canonical_action(args.action) == "help":
            parser.print_help()
            return 0
        request = to_request(args)
        result = runner.run(request, settings=settings, descriptions=args.descriptions)
    except FogetError as exc:
        log.debug("%s failed: %s", args.action, exc)
        core_ui.render_error(exc, err_console, parser.format_usage())
        return exc.exit_code

    core_ui.render_result(result, core_ui.make_console(out_cfg))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
