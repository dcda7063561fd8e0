"""Command-line interface for dirstruct.

This module wires the argument parsers to the traversal core and the renderers. It
reads the persisted configuration once, builds the ignore configuration and the
version-control filter for the invocation, and streams the rendered view to stdout.

Exit Codes:
    0: Successful completion
    1: Runtime error (missing root, unreadable configuration, ...)
    2: Command-line syntax error, invalid pattern or size
    126: Permission denied with ``-P fail``
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    $ dirstruct 2 ~/projects
    $ dirstruct search "*.py" . -f
    $ dirstruct --gs
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from dirstruct.cli.argparser import (
    COMMANDS,
    create_command_parser,
    create_parser,
    preprocess_argv,
    validate_search_args,
)
from dirstruct.cli.output import EXIT_SIGINT, SafeWriter, recording_interrupts, setup_signal_handling, signal_handler
from dirstruct.config import ConfigStore
from dirstruct.exceptions import InvalidPatternError
from dirstruct.file_system_tree.directory_summary import summarize_directory
from dirstruct.file_system_tree.entry import Entry
from dirstruct.file_system_tree.tree_walker import PermissionAction, TreeWalker, check_root, repository_start
from dirstruct.ignore_rules.resolver import IgnoreResolver
from dirstruct.ignore_rules.rule_set import IgnoreConfig
from dirstruct.ignore_rules.size_rules import SizeThreshold
from dirstruct.renderers import (
    FlatRenderer,
    JSONRenderer,
    TreeRenderer,
    render_search_flat,
    render_search_tree,
    render_summary,
    search_header,
)
from dirstruct.search_engine import SearchEngine, SearchSpec
from dirstruct.vcs.classifier import NullStatusClassifier, StatusClassifier
from dirstruct.vcs.git_classifier import build_status_classifier
from dirstruct.vcs.status import VcsFilter, resolve_status_filter

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_PERMISSION = 126


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_ignore_config(store: ConfigStore, inline: Sequence[str], unignore: Sequence[str]) -> IgnoreConfig:
    """Snapshot the persisted patterns and combine them with this run's flags."""
    return IgnoreConfig(config_patterns=store.load(), inline_patterns=list(inline), unignore=list(unignore))


def _note_unavailable_vcs(classifier: StatusClassifier) -> None:
    if isinstance(classifier, NullStatusClassifier) and classifier.reason:
        print(f"Warning: {classifier.reason}; no entries match the git view", file=sys.stderr)


def _warn_unreadable(root: Entry) -> None:
    for node in root.iter_visible():
        if node.unreadable:
            print(f"Warning: cannot read directory {node.absolute_path}", file=sys.stderr)


def run_view(argv: Sequence[str], store: ConfigStore) -> None:
    """Render the tree view (or the depth-0 summary) described by ``argv``."""
    depth, path, flags = preprocess_argv(argv)
    args = create_parser().parse_args(flags)
    configure_logging(args.verbose)

    ignore_config = load_ignore_config(store, args.ignore, args.no_ignore)
    size_threshold = SizeThreshold(args.skip_large) if args.skip_large is not None else None
    start = check_root(path or ".")

    if depth == 0:
        summary = summarize_directory(start, ignore_config)
        with recording_interrupts(), SafeWriter() as writer:
            writer.write_lines(render_summary(summary))
        return

    vcs_filter = VcsFilter(resolve_status_filter(args.git_filters), args.git_from_root)
    classifier: Optional[StatusClassifier] = None
    if vcs_filter.active:
        if vcs_filter.from_root:
            start = repository_start(start)
        classifier = build_status_classifier(start)
        _note_unavailable_vcs(classifier)

    permission_action = PermissionAction.RAISE if args.permission_action == "fail" else PermissionAction.IGNORE
    walker = TreeWalker(
        start,
        IgnoreResolver.from_config(ignore_config, vcs_filter, classifier),
        max_depth=depth,
        size_threshold=size_threshold,
        show_sizes=args.show_sizes,
        permission_action=permission_action,
    )
    root = walker.walk()
    if args.permission_action == "warn":
        _warn_unreadable(root)

    label = str(start) if vcs_filter.from_root else (path or ".")
    if args.json:
        renderer = JSONRenderer(show_sizes=args.show_sizes)
    elif args.flat:
        renderer = FlatRenderer(show_sizes=args.show_sizes, base=path)
    else:
        renderer = TreeRenderer(show_sizes=args.show_sizes, root_label=label)
    with recording_interrupts(), SafeWriter() as writer:
        writer.write_lines(renderer.render(root))


def run_search(args: argparse.Namespace, store: ConfigStore) -> None:
    """Run ``dirstruct search`` and print the matches."""
    validate_search_args(args)
    ignore_config = load_ignore_config(store, args.ignore, args.no_ignore)
    spec = SearchSpec(args.pattern, max_depth=args.depth or None)
    engine = SearchEngine(check_root(args.path), spec, IgnoreResolver.from_config(ignore_config))
    matches: List[Entry] = list(engine.iter_matches())

    with recording_interrupts(), SafeWriter() as writer:
        if args.json:
            writer.write_lines(JSONRenderer().render_matches(matches, engine.root_path, args.pattern))
            return
        writer.write_lines([search_header(len(matches), args.pattern)])
        if not matches:
            return
        writer.write("\n")
        if args.flat:
            writer.write_lines(render_search_flat(matches, engine.root_path, base=args.path))
        else:
            writer.write_lines(render_search_tree(matches, engine.root_path, root_label=args.path))


def run_config_command(args: argparse.Namespace, store: ConfigStore) -> None:
    """Run ``add``, ``remove``, ``list`` or ``clear`` against the configuration file."""
    with recording_interrupts(), SafeWriter() as writer:
        if args.command == "add":
            if store.add(args.pattern):
                writer.write_lines([f"{args.pattern} added to config", f"config file: {store.path}"])
            else:
                writer.write_lines([f"{args.pattern} already in config"])
        elif args.command == "remove":
            if store.remove(args.pattern):
                writer.write_lines([f"{args.pattern} removed from config"])
            else:
                writer.write_lines([f"{args.pattern} not found in config"])
        elif args.command == "list":
            patterns = store.load()
            if not patterns:
                writer.write_lines(["no custom patterns configured", 'add some with: dirstruct add "pattern"'])
                return
            writer.write_lines(["custom ignore patterns:"])
            writer.write_lines(f"  {pattern}" for pattern in patterns)
            writer.write_lines(["", f"config file: {store.path}"])
        elif args.command == "clear":
            if store.clear():
                writer.write_lines(["cleared all custom patterns"])
            else:
                writer.write_lines(["no config file to clear"])


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the dirstruct command-line interface.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` if None.
    """
    setup_signal_handling()
    argv = list(sys.argv[1:] if argv is None else argv)
    store = ConfigStore()

    try:
        if argv and argv[0] in COMMANDS:
            args = create_command_parser().parse_args(argv)
            if args.command == "search":
                configure_logging(args.verbose)
                run_search(args, store)
            else:
                run_config_command(args, store)
        else:
            run_view(argv, store)
    except (InvalidPatternError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_PERMISSION)
    except OSError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    except KeyboardInterrupt:
        # Ctrl+C before any output was written, typically during the traversal.
        sys.exit(EXIT_SIGINT)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
