"""命令行参数解析"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dirtodo import __version__
from dirtodo.commands import PROG, TodoCommands
from dirtodo.errors import InvalidArgument, TodoError
from dirtodo.models.context import TodoConfig
from dirtodo.services.logging_formatter import LevelColorFormatter

_COMMAND_METAVAR = "<command>"

_EXAMPLES = f"""\
examples:
  {PROG} a "Implement user authentication"
  {PROG} l
  {PROG} d 1
  {PROG} c"""


def build_parser() -> argparse.ArgumentParser:
    """构建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Directory-level todo manager",
        epilog=_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        exit_on_error=False,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="print debug logs to stderr",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="disable colored output (also honoured: NO_COLOR)",
    )

    sub = parser.add_subparsers(dest="command", metavar=_COMMAND_METAVAR)

    add = sub.add_parser("add", aliases=["a"], help="add a new todo")
    add.add_argument("text", nargs="*", help="todo text (words are joined with spaces)")
    add.set_defaults(command_name="add")

    list_ = sub.add_parser("list", aliases=["l"], help="list active todos")
    list_.add_argument(
        "--all", "-a",
        action="store_true",
        dest="include_all",
        help="also list completed todos",
    )
    list_.set_defaults(command_name="list")

    done = sub.add_parser("done", aliases=["d"], help="mark an active todo as complete")
    done.add_argument("rank", nargs="?", help="position among active todos (1-based)")
    done.set_defaults(command_name="done")

    remove = sub.add_parser("remove", aliases=["rm"], help="remove an active todo")
    remove.add_argument("rank", nargs="?", help="position among active todos (1-based)")
    remove.set_defaults(command_name="remove")

    clean = sub.add_parser(
        "clean", aliases=["c"],
        help="remove all completed todos, or one completed todo by position",
    )
    clean.add_argument("rank", nargs="?", help="position among completed todos (1-based)")
    clean.set_defaults(command_name="clean")

    show = sub.add_parser("show", help="show active todos (silent, for shell hooks)")
    show.set_defaults(command_name="show")

    help_ = sub.add_parser("help", help="show this help message")
    help_.set_defaults(command_name="help")

    return parser


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    use_color = bool(getattr(sys.stderr, "isatty", lambda: False)())
    handler = logging.StreamHandler()
    handler.setFormatter(LevelColorFormatter(log_format, use_color=use_color))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)


def _use_color(args: argparse.Namespace) -> bool:
    if args.no_color or "NO_COLOR" in os.environ:
        return False
    return bool(getattr(sys.stdout, "isatty", lambda: False)())


def _dispatch(commands: TodoCommands, args: argparse.Namespace) -> None:
    name = args.command_name
    if name == "add":
        commands.add(args.text)
    elif name == "list":
        commands.list_todos(include_all=args.include_all)
    elif name == "done":
        commands.done(args.rank)
    elif name == "remove":
        commands.remove(args.rank)
    elif name == "clean":
        commands.clean(args.rank)
    elif name == "show":
        commands.show()


def main(argv: list[str] | None = None) -> int:
    """CLI 入口函数"""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except argparse.ArgumentError as e:
        if e.argument_name != _COMMAND_METAVAR:
            parser.print_usage()
            print(f"{PROG}: error: {e}")
            return 1
        # 全局选项都不带参数，第一个非选项参数就是命令名
        unknown = next((a for a in argv if not a.startswith("-")), "")
        print(f"Unknown command: {unknown}")
        parser.print_help()
        return 1

    config = TodoConfig(use_color=_use_color(args), verbose=args.verbose)
    _configure_logging(config.verbose)

    if args.command is None:
        parser.print_help()
        return 1
    if args.command_name == "help":
        parser.print_help()
        return 0

    commands = TodoCommands(config)
    try:
        _dispatch(commands, args)
    except TodoError as e:
        print(e.describe())
        if isinstance(e, InvalidArgument) and e.hint:
            print(e.hint)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
