"""Size threshold for summarizing large directories ("skip-large")."""

from typing import Union

from humanfriendly import InvalidSize, parse_size


def parse_file_size(size_str: str, default_unit: str = "MiB") -> int:
    """Parse a human-readable size to bytes.

    A bare number is taken to be in ``default_unit`` (megabytes by default, as the
    ``-s`` flag has always been specified in megabytes).

    Args:
        size_str: Size string like '1GB', '500MB', '2.5K', or just '50'.
        default_unit: Unit applied to bare numbers.

    Returns:
        Size in bytes.

    Raises:
        ValueError: If size_str is not a valid size format.

    Example:
        >>> parse_file_size("50")
        52428800
        >>> parse_file_size("1KB")
        1000
        >>> parse_file_size("2 KiB")
        2048
    """
    text = size_str.strip()
    try:
        float(text)
    except ValueError:
        pass
    else:
        text = f"{text} {default_unit}"

    try:
        size = int(parse_size(text, binary=False))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size_str}': {e}")
    if size < 0:
        raise ValueError(f"Invalid size format '{size_str}': size cannot be negative")
    return size


class SizeThreshold:
    """Summarize visible directories whose aggregate size exceeds a limit.

    This is an independent filter applied after name and version-control resolution:
    a directory over the limit is summarized exactly like an ignored one.

    Attributes:
        max_size_bytes (int): Largest aggregate size that is still expanded.

    Example:
        >>> threshold = SizeThreshold("1MB")
        >>> threshold.max_size_bytes
        1000000
        >>> threshold.exceeded(1000001)
        True
        >>> threshold.exceeded(1000000)
        False
    """

    def __init__(self, max_size: Union[str, int]):
        """Initialize the threshold.

        Args:
            max_size: Human-readable string ('1GB', '500MB', or a bare number of
                megabytes) or an integer number of bytes.

        Raises:
            ValueError: If max_size is malformed or negative.
        """
        if isinstance(max_size, bool):
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")
        if isinstance(max_size, str):
            self.max_size_bytes = parse_file_size(max_size)
        elif isinstance(max_size, int):
            if max_size < 0:
                raise ValueError("Size cannot be negative")
            self.max_size_bytes = max_size
        else:
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")

    def exceeded(self, size_bytes: int) -> bool:
        return size_bytes > self.max_size_bytes

    def __repr__(self) -> str:
        return f"SizeThreshold({self.max_size_bytes})"
