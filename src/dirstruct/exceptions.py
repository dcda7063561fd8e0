class PathNotFoundError(FileNotFoundError):
    """
    Exception raised when the root path of a walk or search does not exist.

    This is the only error that is fatal to a whole invocation. It subclasses
    FileNotFoundError so callers that already handle missing paths keep working.

    Attributes:
        path (str): The path that could not be found.

    Example:
        >>> error = PathNotFoundError("/no/such/dir")
        >>> str(error)
        'Path does not exist: /no/such/dir'
        >>> isinstance(error, FileNotFoundError)
        True
    """

    def __init__(self, path: str) -> None:
        """
        Initialize the exception with the missing path.

        Args:
            path (str): The root path that does not exist.
        """
        self.path = path
        super().__init__(f"Path does not exist: {path}")


class InvalidPatternError(ValueError):
    """
    Exception raised when an ignore or search pattern cannot be used.

    The error names the offending pattern so the user can correct that one argument.
    Empty search patterns and globs that cannot be compiled raise this error.

    Attributes:
        pattern (str): The pattern that was rejected.
        reason (str): Why the pattern was rejected.

    Example:
        >>> error = InvalidPatternError("", "pattern cannot be empty")
        >>> str(error)
        "Invalid pattern '': pattern cannot be empty"
    """

    def __init__(self, pattern: str, reason: str) -> None:
        """
        Initialize the exception with the rejected pattern.

        Args:
            pattern (str): The pattern that was rejected.
            reason (str): Human-readable explanation.
        """
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class VcsUnavailableError(RuntimeError):
    """
    Exception raised when version-control status cannot be determined.

    Typically the path is not inside a git work tree or git is not installed. Callers
    recover by treating every path as unversioned.

    Example:
        >>> error = VcsUnavailableError("not in a git repository")
        >>> str(error)
        'not in a git repository'
    """

    pass
