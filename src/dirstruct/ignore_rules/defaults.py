"""Built-in ignore rules for well-known noisy directories and files."""

from typing import List

from .ignore_rule import IgnoreRule, IgnoreSource, RuleTarget

DEFAULT_IGNORED_DIRS = (
    # Python
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    ".tox",
    "dist",
    "build",
    ".coverage",
    "*.egg-info",
    # Virtual environments
    "venv",
    ".venv",
    "env",
    ".env",
    "virtualenv",
    # JavaScript
    "node_modules",
    ".npm",
    ".yarn",
    ".next",
    ".nuxt",
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Editors
    ".vscode",
    ".idea",
    ".obsidian",
    # Compiled output
    "target",
    "bin",
    "obj",
    # Browser profiles and caches
    "chrome_profile",
    "lofi_chrome_profile",
    "GPUCache",
    "ShaderCache",
    "GrShaderCache",
    "Cache",
    "blob_storage",
    ".DS_Store",
)

DEFAULT_IGNORED_FILES = (
    "*.pyc",
    "*.pyo",
    "*.pyd",
    "*.swp",
    "*.swo",
    "package-lock.json",
    ".DS_Store",
)


def default_rules() -> List[IgnoreRule]:
    """Build the built-in rule list, directory rules first.

    Example:
        >>> rules = default_rules()
        >>> any(rule.pattern == "node_modules" for rule in rules)
        True
    """
    rules = [IgnoreRule(name, IgnoreSource.DEFAULT, RuleTarget.DIRECTORY) for name in DEFAULT_IGNORED_DIRS]
    rules.extend(IgnoreRule(name, IgnoreSource.DEFAULT, RuleTarget.FILE) for name in DEFAULT_IGNORED_FILES)
    return rules
