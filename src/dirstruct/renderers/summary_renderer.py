"""Text rendering of the depth-0 directory overview."""

from typing import Iterator

from humanfriendly import format_size
from humanfriendly.text import pluralize

from dirstruct.file_system_tree.directory_summary import DirectorySummary


def render_summary(summary: DirectorySummary, top_extensions: int = 10) -> Iterator[str]:
    """Render a DirectorySummary as aligned text lines.

    Args:
        summary: The summary to render.
        top_extensions: Number of most frequent extensions to list.

    Example:
        >>> for line in render_summary(summarize_directory("project")):  # doctest: +SKIP
        ...     print(line)
        /home/me/project
          directories  2 visible, 3 total
          files        2 visible, 3 total (1 hidden)
          size         15 bytes visible, 115 bytes total
        <BLANKLINE>
        extensions
          .rs          1
          .toml        1
        <BLANKLINE>
        ignored
          target       1 file
    """
    yield summary.path
    yield f"  {'directories':<12} {summary.visible_dirs} visible, {summary.total_dirs} total"
    hidden = f" ({summary.hidden_files} hidden)" if summary.hidden_files else ""
    yield f"  {'files':<12} {summary.visible_files} visible, {summary.total_files} total{hidden}"
    yield f"  {'size':<12} {format_size(summary.visible_size)} visible, {format_size(summary.total_size)} total"
    if summary.unreadable:
        yield f"  {'unreadable':<12} {pluralize(summary.unreadable, 'directory', 'directories')}"

    if summary.extensions:
        yield ""
        yield "extensions"
        ordered = sorted(summary.extensions.items(), key=lambda item: (-item[1], item[0]))
        width = max(len(ext) for ext, _ in ordered[:top_extensions])
        for ext, count in ordered[:top_extensions]:
            yield f"  {ext:<{max(width, 12)}} {count}"
        if len(ordered) > top_extensions:
            yield f"  ... and {len(ordered) - top_extensions} more"

    if summary.ignored:
        yield ""
        yield "ignored"
        names = sorted(summary.ignored, key=str.lower)
        width = max(len(name) for name in names)
        for name in names:
            yield f"  {name:<{max(width, 12)}} {pluralize(summary.ignored[name], 'file')}"
