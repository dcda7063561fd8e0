"""Unit tests for the status classifier interface."""

from pathlib import Path

from dirstruct.vcs.classifier import NullStatusClassifier
from dirstruct.vcs.status import StatusFilter, VcsStatus


def test_null_classifier_reports_unversioned(tmp_path):
    classifier = NullStatusClassifier("not in a git repository")
    assert classifier.classify(tmp_path) is VcsStatus.UNVERSIONED
    assert classifier.reason == "not in a git repository"
    assert classifier.last_commit(tmp_path) is None


def test_null_classifier_matches_only_without_filter(tmp_path):
    classifier = NullStatusClassifier()
    assert classifier.matches(tmp_path, StatusFilter.NONE)
    assert not classifier.matches(tmp_path, StatusFilter.TRACKED)
    assert classifier.has_matching_descendant(tmp_path, StatusFilter.NONE)
    assert not classifier.has_matching_descendant(tmp_path, StatusFilter.UNTRACKED)


def test_default_descendant_probe_walks_the_tree(tmp_path, fake_classifier):
    (tmp_path / "a" / "b" / "c").mkdir(parents=True)
    (tmp_path / "a" / "b" / "c" / "deep.txt").touch()
    (tmp_path / "other").mkdir()
    classifier = fake_classifier(tmp_path, {"a/b/c/deep.txt": VcsStatus.CHANGED})
    assert classifier.has_matching_descendant(classifier.root / "a", StatusFilter.CHANGED)
    assert not classifier.has_matching_descendant(classifier.root / "other", StatusFilter.CHANGED)
    assert not classifier.has_matching_descendant(classifier.root / "a", StatusFilter.STAGED)


def test_default_descendant_probe_survives_missing_directory(fake_classifier, tmp_path):
    classifier = fake_classifier(tmp_path)
    assert not classifier.has_matching_descendant(Path(tmp_path) / "missing", StatusFilter.TRACKED)
