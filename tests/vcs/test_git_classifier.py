"""Unit tests for the git-backed classifier, with git itself mocked out."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from dirstruct.exceptions import VcsUnavailableError
from dirstruct.vcs.classifier import NullStatusClassifier
from dirstruct.vcs.git_classifier import GitStatusClassifier, build_status_classifier, find_repository_root
from dirstruct.vcs.status import CommitInfo, StatusFilter, VcsStatus


def completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "repo"
    (root / "src" / "pkg").mkdir(parents=True)
    return root.resolve()


def fake_git(repo_root, outputs):
    """Build a subprocess.run replacement answering git commands from ``outputs``."""

    def run(cmd, **kwargs):
        args = tuple(cmd[3:])  # strip "git -C <dir>"
        if args == ("rev-parse", "--show-toplevel"):
            return completed(f"{repo_root}\n")
        for prefix, result in outputs.items():
            if args[: len(prefix)] == prefix:
                return result
        return completed("")

    return run


def test_classify_from_path_lists(repo):
    classifier = GitStatusClassifier(
        repo,
        tracked=["src/main.py", "src/pkg/util.py"],
        untracked=["notes.txt"],
        staged=["src/main.py"],
        changed=["src/pkg/util.py"],
    )
    assert classifier.classify(repo / "src" / "main.py") == VcsStatus.TRACKED | VcsStatus.STAGED
    assert classifier.classify(repo / "src" / "pkg" / "util.py") == VcsStatus.TRACKED | VcsStatus.CHANGED
    assert classifier.classify(repo / "notes.txt") is VcsStatus.UNTRACKED
    assert classifier.classify(repo / "unknown") is VcsStatus.UNVERSIONED


def test_matching_descendants_use_recorded_ancestors(repo):
    classifier = GitStatusClassifier(repo, tracked=["src/pkg/util.py"], untracked=["notes.txt"])
    assert classifier.has_matching_descendant(repo, StatusFilter.TRACKED)
    assert classifier.has_matching_descendant(repo / "src", StatusFilter.TRACKED)
    assert classifier.has_matching_descendant(repo / "src" / "pkg", StatusFilter.TRACKED)
    assert not classifier.has_matching_descendant(repo / "src", StatusFilter.UNTRACKED)
    assert not classifier.has_matching_descendant(repo / "src", StatusFilter.STAGED)
    assert classifier.has_matching_descendant(repo / "src", StatusFilter.NONE)


def test_paths_with(repo):
    classifier = GitStatusClassifier(repo, tracked=["a.py", "b.py"], staged=["b.py"])
    assert classifier.paths_with(VcsStatus.STAGED) == frozenset({repo / "b.py"})
    assert classifier.paths_with(VcsStatus.TRACKED) == frozenset({repo / "a.py", repo / "b.py"})


def test_find_repository_root(repo):
    with patch("subprocess.run", side_effect=fake_git(repo, {})):
        assert find_repository_root(repo / "src") == repo


def test_find_repository_root_outside_repository(tmp_path):
    with patch("subprocess.run", return_value=completed("", returncode=128, stderr="fatal: not a git repository")):
        with pytest.raises(VcsUnavailableError, match="not in a git repository"):
            find_repository_root(tmp_path)


def test_find_repository_root_without_git(tmp_path):
    with patch("subprocess.run", side_effect=FileNotFoundError("git")):
        with pytest.raises(VcsUnavailableError, match="git is not available"):
            find_repository_root(tmp_path)


def test_discover_runs_status_queries(repo):
    outputs = {
        ("ls-files", "--others"): completed("new.txt\0"),
        ("ls-files",): completed("src/main.py\0src/pkg/util.py\0"),
        ("diff", "--name-only", "--cached"): completed("src/main.py\0"),
        ("diff", "--name-only"): completed(""),
    }
    with patch("subprocess.run", side_effect=fake_git(repo, outputs)) as run:
        classifier = GitStatusClassifier.discover(repo / "src")

    assert classifier.repo_root == repo
    assert classifier.classify(repo / "new.txt") is VcsStatus.UNTRACKED
    assert classifier.classify(repo / "src" / "main.py") == VcsStatus.TRACKED | VcsStatus.STAGED
    assert not classifier.paths_with(VcsStatus.CHANGED)
    for call in run.call_args_list:
        assert call.args[0][:3] == ["git", "-C", call.args[0][2]]
        assert call.kwargs["timeout"] > 0


def test_discover_failing_query_raises(repo):
    outputs = {("ls-files",): completed("", returncode=1, stderr="boom")}
    with patch("subprocess.run", side_effect=fake_git(repo, outputs)):
        with pytest.raises(VcsUnavailableError, match="boom"):
            GitStatusClassifier.discover(repo)


def test_build_status_classifier_falls_back(tmp_path):
    with patch("subprocess.run", return_value=completed("", returncode=128)):
        classifier = build_status_classifier(tmp_path)
    assert isinstance(classifier, NullStatusClassifier)
    assert "not in a git repository" in classifier.reason


def test_last_commit_is_parsed_and_cached(repo):
    classifier = GitStatusClassifier(repo, tracked=["src/main.py"])
    log = completed("abc1234\x1fFix parser\x1fDev Person\x1f2 days ago\n")
    with patch("subprocess.run", return_value=log) as run:
        first = classifier.last_commit(repo / "src" / "main.py")
        second = classifier.last_commit(repo / "src" / "main.py")
    assert first == CommitInfo("abc1234", "Fix parser", "Dev Person", "2 days ago")
    assert second is first
    assert run.call_count == 1
    assert "log" in run.call_args.args[0]


def test_last_commit_missing_history(repo):
    classifier = GitStatusClassifier(repo)
    with patch("subprocess.run", return_value=completed("")):
        assert classifier.last_commit(Path(repo / "new.txt")) is None
