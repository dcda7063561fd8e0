"""Unit tests for IgnoreResolver."""

from dirstruct.ignore_rules import IgnoreConfig, IgnoreDecision, IgnoreResolver
from dirstruct.types import EntryKind
from dirstruct.vcs.classifier import NullStatusClassifier
from dirstruct.vcs.status import StatusFilter, VcsFilter, VcsStatus


def test_default_resolver_hides_noisy_directories():
    resolver = IgnoreResolver()
    assert resolver.resolve("node_modules") is IgnoreDecision.HIDE
    assert resolver.resolve("src") is IgnoreDecision.SHOW
    assert resolver.resolve("main.pyc", kind=EntryKind.FILE) is IgnoreDecision.HIDE


def test_root_is_never_hidden():
    resolver = IgnoreResolver.from_config(IgnoreConfig(inline_patterns=["project"]))
    assert resolver.resolve("project", depth=0) is IgnoreDecision.SHOW
    assert resolver.resolve("project", depth=1) is IgnoreDecision.HIDE


def test_unignored_decision_when_only_removed_rules_match():
    resolver = IgnoreResolver.from_config(IgnoreConfig(unignore=["target"]))
    decision = resolver.resolve("target")
    assert decision is IgnoreDecision.UNIGNORED
    assert decision.is_visible


def test_inline_pattern_beats_removed_default():
    resolver = IgnoreResolver.from_config(IgnoreConfig(inline_patterns=["tar*"], unignore=["target"]))
    assert resolver.resolve("target") is IgnoreDecision.HIDE


def test_vcs_filter_inactive_passes_everything(tmp_path):
    resolver = IgnoreResolver()
    assert not resolver.vcs_active
    assert resolver.status_filter is StatusFilter.NONE
    assert resolver.passes_vcs_filter(tmp_path / "anything", EntryKind.FILE)


def test_vcs_filter_checks_files(tmp_path, fake_classifier):
    classifier = fake_classifier(tmp_path, {"a.py": VcsStatus.TRACKED | VcsStatus.STAGED, "b.py": VcsStatus.TRACKED})
    resolver = IgnoreResolver(vcs_filter=VcsFilter(StatusFilter.STAGED), classifier=classifier)
    assert resolver.passes_vcs_filter(classifier.root / "a.py", EntryKind.FILE)
    assert not resolver.passes_vcs_filter(classifier.root / "b.py", EntryKind.FILE)


def test_vcs_filter_keeps_directories_with_matching_descendants(tmp_path, fake_classifier):
    (tmp_path / "pkg" / "sub").mkdir(parents=True)
    (tmp_path / "pkg" / "sub" / "new.py").touch()
    (tmp_path / "empty").mkdir()
    classifier = fake_classifier(tmp_path, {"pkg/sub/new.py": VcsStatus.UNTRACKED})
    resolver = IgnoreResolver(vcs_filter=VcsFilter(StatusFilter.UNTRACKED), classifier=classifier)
    assert resolver.passes_vcs_filter(classifier.root / "pkg", EntryKind.DIRECTORY)
    assert not resolver.passes_vcs_filter(classifier.root / "empty", EntryKind.DIRECTORY)


def test_null_classifier_hides_everything_under_active_filter(tmp_path):
    (tmp_path / "dir").mkdir()
    resolver = IgnoreResolver(vcs_filter=VcsFilter(StatusFilter.TRACKED), classifier=NullStatusClassifier("no git"))
    assert not resolver.passes_vcs_filter(tmp_path / "dir", EntryKind.DIRECTORY)
    assert not resolver.passes_vcs_filter(tmp_path / "file", EntryKind.FILE)
