import pytest

from git_ai_commit.exceptions import NoChangesError
from git_ai_commit.staging import StagingController


def test_no_changes_raises_before_side_effects(fake_repo):
    repo = fake_repo(status="")
    with pytest.raises(NoChangesError):
        with StagingController(repo):
            pytest.fail("body must not run")
    assert repo.calls == [("status",)]


def test_stages_everything_and_restores_snapshot(fake_repo):
    repo = fake_repo(untracked=["new.py"])
    with StagingController(repo):
        assert repo.calls == [
            ("status",),
            ("save_index",),
            ("intent_to_add", ("new.py",)),
            ("stage_all",),
        ]
    assert repo.calls[-1] == ("restore_index", b"saved-index")


def test_interactive_staging(fake_repo):
    repo = fake_repo()
    with StagingController(repo, interactive=True):
        pass
    assert ("stage_interactive",) in repo.calls
    assert ("stage_all",) not in repo.calls


def test_restores_snapshot_on_error(fake_repo):
    repo = fake_repo()
    with pytest.raises(RuntimeError):
        with StagingController(repo):
            raise RuntimeError("boom")
    assert repo.calls[-1] == ("restore_index", b"saved-index")


def test_restores_snapshot_on_keyboard_interrupt(fake_repo):
    repo = fake_repo()
    with pytest.raises(KeyboardInterrupt):
        with StagingController(repo):
            raise KeyboardInterrupt
    assert repo.calls[-1] == ("restore_index", b"saved-index")


def test_restores_snapshot_when_staging_fails(fake_repo):
    repo = fake_repo()

    def fail():
        raise RuntimeError("git add failed")

    repo.stage_all = fail
    with pytest.raises(RuntimeError):
        with StagingController(repo):
            pytest.fail("body must not run")
    assert repo.calls[-1] == ("restore_index", b"saved-index")


def test_after_commit_resets_to_head(fake_repo):
    repo = fake_repo()
    with StagingController(repo) as staging:
        staging.mark_committed()
    assert repo.calls[-1] == ("reset_index",)
    assert ("restore_index", b"saved-index") not in repo.calls


def test_restore_runs_once(fake_repo):
    repo = fake_repo()
    with StagingController(repo) as staging:
        staging.restore()
    assert repo.calls.count(("restore_index", b"saved-index")) == 1


def test_handoff_leaves_index_alone(fake_repo):
    repo = fake_repo(untracked=["new.py"])
    with pytest.raises(RuntimeError):
        with StagingController(repo, handoff=True):
            raise RuntimeError("boom")
    assert repo.calls == [("status",)]


def test_restores_repository_without_index(fake_repo):
    repo = fake_repo()
    repo.save_index = lambda: None
    with StagingController(repo):
        pass
    assert repo.calls[-1] == ("restore_index", None)
