import subprocess

import pytest

from jivaoperator import version


def test_get_returns_build_version():
    assert version.get() == "0.0.1"


def test_recorded_commit_is_returned(monkeypatch):
    monkeypatch.setattr(version, "COMMIT", "abcdef0123456789")
    assert version.get_git_commit() == "abcdef0123456789"


def test_version_details_use_short_commit(monkeypatch):
    monkeypatch.setattr(version, "COMMIT", "abcdef0123456789")
    assert version.get_version_details() == "0.0.1-abcdef0"


def test_version_details_reject_short_commit(monkeypatch):
    monkeypatch.setattr(version, "COMMIT", "abc")
    with pytest.raises(ValueError):
        version.get_version_details()


def test_git_commit_from_git(monkeypatch):
    monkeypatch.setattr(version, "COMMIT", "")

    def fake_run(args, **kwargs):
        assert args == ["git", "rev-parse", "--verify", "HEAD"]
        return subprocess.CompletedProcess(args, 0, stdout="0123456789abcdef\n", stderr="")

    monkeypatch.setattr(version.subprocess, "run", fake_run)
    assert version.get_git_commit() == "0123456789abcdef"


def test_git_commit_failure_returns_empty(monkeypatch):
    monkeypatch.setattr(version, "COMMIT", "")

    def fake_run(args, **kwargs):
        raise subprocess.CalledProcessError(128, args)

    monkeypatch.setattr(version.subprocess, "run", fake_run)
    assert version.get_git_commit() == ""


def test_git_missing_returns_empty(monkeypatch):
    monkeypatch.setattr(version, "COMMIT", "")

    def fake_run(args, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(version.subprocess, "run", fake_run)
    assert version.get_git_commit() == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2.6.0", True),
        ("2.7.0", True),
        ("2.8.0-RC1", True),
        ("2.9.0", True),
        ("2.5.0", False),
        ("", False),
        ("0.0.1", False),
    ],
)
def test_is_current_version_valid(value, expected):
    assert version.is_current_version_valid(value) is expected


def test_is_desired_version_valid_default():
    assert version.is_desired_version_valid("0.0.1") is True
    assert version.is_desired_version_valid("0.0.1-dev") is True
    assert version.is_desired_version_valid("2.9.0") is False


def test_is_desired_version_valid_with_suffixed_build(monkeypatch):
    monkeypatch.setattr(version, "VERSION", "2.9.0-dev")
    assert version.is_desired_version_valid("2.9.0") is True
    assert version.is_desired_version_valid("2.9.0-RC2") is True
    assert version.is_desired_version_valid("2.8.0") is False