"""Command-line argument parsing for dirstruct.

The tree view takes its DEPTH and PATH as free-standing tokens in any order
(``dirstruct 2 src`` and ``dirstruct src 2`` are the same), so they are pulled out of
argv before argparse sees the flags. Subcommands (search, add, remove, list, clear)
are parsed by a separate parser with ordinary positionals.
"""

import argparse
import os
from typing import Any, List, Optional, Sequence, Tuple, Union

from dirstruct import __version__
from dirstruct.vcs.status import StatusFilter

COMMANDS = ("search", "add", "remove", "list", "clear")

# Flags whose next token is their value, never a DEPTH or PATH.
VALUE_FLAGS = ("-i", "--ignore", "-s", "--skip-large", "-n", "--no-ignore", "-P", "--permission-action")

# Git flags: option strings -> (filter, start from repository root).
GIT_FLAGS = {
    ("-g", "--git"): (StatusFilter.TRACKED, False),
    ("--gu",): (StatusFilter.UNTRACKED, False),
    ("--gs",): (StatusFilter.STAGED, False),
    ("--gc",): (StatusFilter.CHANGED, False),
    ("--gh",): (StatusFilter.HISTORY, False),
    ("--gr",): (StatusFilter.TRACKED, True),
    ("--gur",): (StatusFilter.UNTRACKED, True),
    ("--gsr",): (StatusFilter.STAGED, True),
    ("--gcr",): (StatusFilter.CHANGED, True),
    ("--ghr",): (StatusFilter.HISTORY, True),
}


def preprocess_argv(argv: Sequence[str]) -> Tuple[Optional[int], Optional[str], List[str]]:
    """Extract DEPTH and PATH from a tree-view argv.

    The first bare token that is a non-negative integer becomes the depth, the first
    other bare token the path. Further bare tokens are dropped. Tokens following a
    flag that takes a value are left in place.

    Args:
        argv: Arguments without the program name.

    Returns:
        Tuple of (depth, path, remaining flag arguments).

    Example:
        >>> preprocess_argv(["src", "-i", "docs", "2"])
        (2, 'src', ['-i', 'docs'])
        >>> preprocess_argv(["-n", "3"])
        (None, None, ['-n', '3'])
    """
    depth: Optional[int] = None
    path: Optional[str] = None
    remaining: List[str] = []
    skip_next = False

    for token in argv:
        if skip_next:
            remaining.append(token)
            skip_next = False
            continue
        if token.startswith("-") and token != "-":
            remaining.append(token)
            skip_next = token in VALUE_FLAGS
            continue
        if depth is None and token.isdigit():
            depth = int(token)
        elif path is None:
            path = token

    return depth, path, remaining


class GitFilterAction(argparse.Action):
    """Collect git view flags as they are encountered.

    Every flag appends its filter to ``namespace.git_filters``; root variants also set
    ``namespace.git_from_root``. The winning filter is chosen later by priority.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        kwargs.setdefault("nargs", 0)
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        status_filter, from_root = self.const
        filters = list(getattr(namespace, "git_filters", None) or [])
        filters.append(status_filter)
        namespace.git_filters = filters
        if from_root:
            namespace.git_from_root = True


def _add_ignore_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-i",
        "--ignore",
        dest="ignore",
        action="append",
        default=[],
        metavar="PATTERNS",
        help=(
            "Comma-separated names or globs to ignore for this run, e.g. 'venv,*.log'. "
            "Matching directories are summarized, matching files are left out. Can be repeated."
        ),
    )
    parser.add_argument(
        "-n",
        "--no-ignore",
        dest="no_ignore",
        action="append",
        default=[],
        metavar="TARGET",
        help=(
            "Un-ignore: a pattern to stop ignoring, 'defaults', 'config' or 'all' "
            "(defaults and config). Can be repeated: -n defaults -n config."
        ),
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Write the result as a JSON document.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information (unreadable entries, git commands) to stderr.",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the parser for the tree view's flags.

    DEPTH and PATH are removed by :func:`preprocess_argv` beforehand and are only
    documented here.
    """
    description = """
    dirstruct: a smarter tree.

    Shows the structure of a directory while summarizing well-known noisy directories
    (dependency caches, build output, VCS metadata) as a file count and size instead
    of listing them. Views can be filtered by git status, and names can be searched
    with substrings or globs.

    Positional tokens:
      DEPTH   levels to show below PATH (default: unlimited; 0 shows a summary)
      PATH    directory to show (default: .)
    """

    epilog = """
    Examples:
      dirstruct                          # whole tree of the current directory
      dirstruct 2 ~/projects             # two levels
      dirstruct 0 .                      # summary: totals, extensions, ignored dirs
      dirstruct -i "venv,*.log"          # ignore more for this run
      dirstruct -n target                # show target/ contents after all
      dirstruct -n all                   # only inline -i patterns apply
      dirstruct -z -s 100                # sizes; summarize dirs over 100 MB
      dirstruct --gs                     # staged files only
      dirstruct --gcr                    # changed files, from the repository root

      dirstruct search "*.py" ~/projects 3
      dirstruct search gui . -f
      dirstruct add "venv_old"           # persist an ignore pattern
      dirstruct list

    Git views (when several are given, the highest priority wins:
    changed > staged > untracked > tracked > history):
      -g/--git tracked, --gu untracked, --gs staged, --gc changed, --gh history
      root variants: --gr, --gur, --gsr, --gcr, --ghr
    """

    parser = argparse.ArgumentParser(
        prog="dirstruct",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"dirstruct {__version__}", help="Show the version and exit"
    )
    _add_ignore_arguments(parser)
    parser.add_argument(
        "-z",
        "--size",
        dest="show_sizes",
        action="store_true",
        help="Show file and directory sizes.",
    )
    parser.add_argument(
        "-s",
        "--skip-large",
        metavar="SIZE",
        help="Summarize directories larger than SIZE (a bare number means megabytes, e.g. 100, 2GB).",
    )
    parser.add_argument(
        "-f",
        "--flat",
        action="store_true",
        help="List full paths, one per line, instead of a tree.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="ignore",
        help="How to handle directories that cannot be read (default: ignore).",
    )

    git = parser.add_argument_group("git views")
    for option_strings, (status_filter, from_root) in GIT_FLAGS.items():
        scope = " from the repository root" if from_root else ""
        git.add_argument(
            *option_strings,
            dest="git_filters",
            action=GitFilterAction,
            const=(status_filter, from_root),
            help=f"Show {status_filter.value} files{scope}.",
        )
    parser.set_defaults(git_filters=[], git_from_root=False)

    _add_common_arguments(parser)
    return parser


def create_command_parser() -> argparse.ArgumentParser:
    """Create the parser for the subcommands."""
    parser = argparse.ArgumentParser(prog="dirstruct", description="dirstruct subcommands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser(
        "search",
        help="Find files and directories by name",
        description=(
            "Find entries whose name matches PATTERN. Plain text is a case-insensitive substring match; "
            "patterns with * or ? are globs matched against the whole name. Comma-separated lists match any member."
        ),
    )
    search.add_argument("pattern", metavar="PATTERN")
    search.add_argument("path", metavar="PATH", nargs="?", default=".")
    search.add_argument(
        "depth", metavar="DEPTH", nargs="?", type=int, default=0, help="Deepest level searched (0: unlimited)"
    )
    search.add_argument("-f", "--flat", action="store_true", help="Print full paths instead of a tree.")
    _add_ignore_arguments(search)
    _add_common_arguments(search)

    add = subparsers.add_parser("add", help="Add a pattern to the persistent ignore list")
    add.add_argument("pattern", metavar="PATTERN")
    remove = subparsers.add_parser("remove", help="Remove a pattern from the persistent ignore list")
    remove.add_argument("pattern", metavar="PATTERN")
    subparsers.add_parser("list", help="List the persistent ignore patterns")
    subparsers.add_parser("clear", help="Delete all persistent ignore patterns")
    return parser


def validate_search_args(args: argparse.Namespace) -> None:
    """Normalize search positionals.

    ``dirstruct search PATTERN 3`` means depth 3 in the current directory, so a lone
    integer in the PATH slot is taken as the depth.

    Raises:
        ValueError: If the depth is negative.
    """
    if args.path.isdigit() and args.depth == 0 and not os.path.isdir(args.path):
        args.depth = int(args.path)
        args.path = "."
    if args.depth < 0:
        raise ValueError(f"Search depth cannot be negative: {args.depth}")
