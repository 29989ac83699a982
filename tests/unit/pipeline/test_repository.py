"""Tests for the repository synchronizer."""

from pathlib import Path

import pytest

from base_tooling.core.config_store import DEFAULT_REPO_URL
from base_tooling.core.errors import (
    DirtyRepositoryError,
    DivergedHistoryError,
    PrerequisiteError,
    ResolutionError,
)
from base_tooling.core.invocation import PullMode
from base_tooling.pipeline.repository import sync_repository
from base_tooling.pipeline.step import StepStatus
from tests.fakes.git import INITIAL_COMMIT, FakeGit
from tests.test_utils.env_helpers import workstation_env


def _checkout_env(tmp_path: Path, **git_kwargs):
    install_dir = tmp_path / "home" / "alice" / ".base-tooling"
    git = FakeGit(checkouts={install_dir}, heads={install_dir: INITIAL_COMMIT}, **git_kwargs)
    env = workstation_env(tmp_path, git=git)
    install_dir.mkdir()
    return env, install_dir


def test_absent_checkout_is_cloned(tmp_path: Path) -> None:
    env = workstation_env(tmp_path)

    result = sync_repository(env.step_context())

    assert env.git.cloned == [(DEFAULT_REPO_URL, env.install_dir)]
    assert env.git.fetched == []
    assert result.status is StepStatus.CHANGED


def test_absent_checkout_is_cloned_even_with_no_pull(tmp_path: Path) -> None:
    env = workstation_env(tmp_path)

    sync_repository(env.step_context(pull_mode=PullMode.NO_PULL))

    assert len(env.git.cloned) == 1


def test_update_requires_existing_checkout(tmp_path: Path) -> None:
    env = workstation_env(tmp_path)

    with pytest.raises(PrerequisiteError, match="not found"):
        sync_repository(env.step_context(require_checkout=True))

    assert env.git.cloned == []


def test_directory_that_is_not_a_checkout_fails(tmp_path: Path) -> None:
    env = workstation_env(tmp_path)
    env.install_dir.mkdir()

    with pytest.raises(ResolutionError, match="not a git checkout"):
        sync_repository(env.step_context())


def test_clean_checkout_is_fast_forwarded(tmp_path: Path) -> None:
    install_dir = tmp_path / "home" / "alice" / ".base-tooling"
    env, _ = _checkout_env(tmp_path, upstream_heads={install_dir: "2" * 40})

    result = sync_repository(env.step_context())

    assert env.git.fetched == [install_dir]
    assert env.git.fast_forwarded == [install_dir]
    assert result.status is StepStatus.CHANGED
    assert result.detail == "11111111 -> 22222222"


def test_up_to_date_checkout_is_unchanged(tmp_path: Path) -> None:
    env, install_dir = _checkout_env(tmp_path)

    result = sync_repository(env.step_context())

    assert env.git.fetched == [install_dir]
    assert result.status is StepStatus.UNCHANGED
    assert result.detail == "already at 11111111"


def test_no_pull_skips_existing_checkout(tmp_path: Path) -> None:
    env, _ = _checkout_env(tmp_path)

    result = sync_repository(env.step_context(pull_mode=PullMode.NO_PULL))

    assert result.status is StepStatus.SKIPPED
    assert env.git.fetched == []


def test_dirty_checkout_aborts_before_fetch(tmp_path: Path) -> None:
    install_dir = tmp_path / "home" / "alice" / ".base-tooling"
    env, _ = _checkout_env(tmp_path, dirty={install_dir})

    with pytest.raises(DirtyRepositoryError) as exc_info:
        sync_repository(env.step_context())

    assert exc_info.value.exit_code == 5
    assert env.git.fetched == []


def test_dirty_checkout_is_fine_with_no_pull(tmp_path: Path) -> None:
    install_dir = tmp_path / "home" / "alice" / ".base-tooling"
    env, _ = _checkout_env(tmp_path, dirty={install_dir})

    result = sync_repository(env.step_context(pull_mode=PullMode.NO_PULL))

    assert result.status is StepStatus.SKIPPED


def test_diverged_history_is_never_forced(tmp_path: Path) -> None:
    install_dir = tmp_path / "home" / "alice" / ".base-tooling"
    env, _ = _checkout_env(tmp_path, diverged={install_dir})

    with pytest.raises(DivergedHistoryError):
        sync_repository(env.step_context())

    assert env.git.fast_forwarded == []
