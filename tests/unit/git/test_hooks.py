"""Tests for git hook installation."""

from unittest.mock import patch

import pytest

from preflight.cli.errors import HookInstallError, NotAGitRepositoryError
from preflight.git.hooks import HooksInstaller, trigger_for_program


@pytest.fixture()
def repo(tmp_path):
    """A fake repository whose git dir is tmp_path/repo/.git."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    with patch("preflight.git.hooks.git_dir", return_value=root / ".git"):
        yield root


@pytest.fixture()
def executable(tmp_path):
    path = tmp_path / "bin" / "cargo-preflight"
    path.parent.mkdir()
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


class TestTriggerForProgram:
    """Tests for deriving the trigger from the program name."""

    @pytest.mark.parametrize(
        "program,trigger",
        [
            ("pre-commit", "commit"),
            ("/repo/.git/hooks/pre-push", "push"),
            ("cargo-preflight", "preflight"),
            ("preflight", "preflight"),
            ("post-commit", "preflight"),
            (None, "preflight"),
        ],
    )
    def test_mapping(self, program, trigger):
        assert trigger_for_program(program) == trigger


class TestInstall:
    """Tests for HooksInstaller.install."""

    def test_installs_symlinks(self, repo, executable):
        results = HooksInstaller(repo, executable).install(["commit", "push"])

        hooks = repo / ".git" / "hooks"
        assert [r.hook for r in results] == ["pre-commit", "pre-push"]
        assert all(r.success and not r.skipped for r in results)
        assert (hooks / "pre-commit").is_symlink()
        assert (hooks / "pre-push").resolve() == executable.resolve()

    def test_only_configured_triggers(self, repo, executable):
        HooksInstaller(repo, executable).install(["push"])

        hooks = repo / ".git" / "hooks"
        assert (hooks / "pre-push").is_symlink()
        assert not (hooks / "pre-commit").exists()

    def test_reinstall_is_skipped(self, repo, executable):
        installer = HooksInstaller(repo, executable)
        installer.install(["push"])

        results = installer.install(["push"])

        assert results[0].success is True
        assert results[0].skipped is True

    def test_foreign_hook_is_kept(self, repo, executable):
        hooks = repo / ".git" / "hooks"
        hooks.mkdir()
        (hooks / "pre-push").write_text("#!/bin/sh\nmake lint\n")

        results = HooksInstaller(repo, executable).install(["push"])

        assert results[0].success is False
        assert "not a preflight hook" in results[0].message
        assert (hooks / "pre-push").read_text() == "#!/bin/sh\nmake lint\n"

    def test_force_replaces_foreign_hook(self, repo, executable):
        hooks = repo / ".git" / "hooks"
        hooks.mkdir()
        (hooks / "pre-push").write_text("#!/bin/sh\nmake lint\n")

        results = HooksInstaller(repo, executable).install(["push"], force=True)

        assert results[0].success is True
        assert (hooks / "pre-push").is_symlink()

    def test_unknown_trigger(self, repo, executable):
        with pytest.raises(HookInstallError) as exc_info:
            HooksInstaller(repo, executable).install(["merge"])
        assert "Invalid hook in config: merge" in exc_info.value.message
        assert not (repo / ".git" / "hooks").exists()

    def test_outside_repository(self, tmp_path, executable):
        with patch("preflight.git.hooks.git_dir", return_value=None):
            with pytest.raises(NotAGitRepositoryError):
                HooksInstaller(tmp_path, executable).install(["push"])


class TestRemove:
    """Tests for HooksInstaller.remove."""

    def test_removes_preflight_hooks(self, repo, executable):
        installer = HooksInstaller(repo, executable)
        installer.install(["commit", "push"])

        results = installer.remove()

        hooks = repo / ".git" / "hooks"
        assert all(r.success and not r.skipped for r in results)
        assert not (hooks / "pre-commit").exists()
        assert not (hooks / "pre-push").exists()

    def test_missing_hooks_are_skipped(self, repo, executable):
        results = HooksInstaller(repo, executable).remove()
        assert all(r.skipped for r in results)

    def test_foreign_hook_left_in_place(self, repo, executable):
        hooks = repo / ".git" / "hooks"
        hooks.mkdir()
        (hooks / "pre-commit").write_text("#!/bin/sh\n")

        results = HooksInstaller(repo, executable).remove()

        assert results[0].skipped is True
        assert (hooks / "pre-commit").exists()

    def test_symlink_named_preflight_is_recognised(self, repo, tmp_path):
        """Test that a hook linked to another cargo-preflight install is removed."""
        other = tmp_path / "elsewhere" / "cargo-preflight"
        other.parent.mkdir()
        other.write_text("")
        hooks = repo / ".git" / "hooks"
        hooks.mkdir()
        (hooks / "pre-push").symlink_to(other)

        results = HooksInstaller(repo, tmp_path / "unused").remove()

        assert results[1].skipped is False
        assert not (hooks / "pre-push").is_symlink()
