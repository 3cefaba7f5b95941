"""Tests for cogbump.output.errors module."""

from __future__ import annotations

from pathlib import Path

from cogbump.core.config import MalformedConfig
from cogbump.core.errors import ErrorCode
from cogbump.output.console import MockConsole, Style
from cogbump.output.errors import bump_error_exit_code, print_bump_error, print_config_error
from cogbump.services.bump.errors import (
    BumpFailed,
    HookFailed,
    PostHookFailedAfterBump,
    UnknownProfile,
    UnresolvedToken,
)


class TestExitCodes:
    def test_each_error_has_its_own_code(self) -> None:
        hook_failed = HookFailed(index=0, command="git push", exit_status=1, phase="post")
        assert bump_error_exit_code(UnknownProfile("beta", ("alpha",))) == ErrorCode.UNKNOWN_PROFILE
        assert bump_error_exit_code(UnresolvedToken("foo", 0, "echo {{foo}}", "pre")) == ErrorCode.CONFIG_ERROR
        assert bump_error_exit_code(HookFailed(1, "false", 1, "pre")) == ErrorCode.HOOK_FAILED
        assert bump_error_exit_code(BumpFailed("tag exists")) == ErrorCode.BUMP_FAILED
        assert (
            bump_error_exit_code(PostHookFailedAfterBump("1.2.0", hook_failed, ("git push",)))
            == ErrorCode.POST_HOOK_FAILED
        )


class TestPrintBumpError:
    def test_unknown_profile_lists_available(self) -> None:
        console = MockConsole()
        print_bump_error(UnknownProfile(name="beta", available=("alpha", "hotfix")), console)

        assert console.messages[0] == "error: Unknown bump profile: beta"
        assert console.messages[1] == "Available: alpha, hotfix"

    def test_unknown_profile_without_profiles(self) -> None:
        console = MockConsole()
        print_bump_error(UnknownProfile(name="beta", available=()), console)
        assert "No [bump_profiles] are defined" in console.text

    def test_unresolved_token(self) -> None:
        console = MockConsole()
        print_bump_error(UnresolvedToken("foo", 2, "echo {{foo}}", "post"), console)
        assert console.messages[0] == "error: Unknown token {{foo}} in post-bump hook #3: echo {{foo}}"

    def test_pre_hook_failure_names_index_and_command(self) -> None:
        console = MockConsole()
        print_bump_error(HookFailed(index=1, command="cargo bump 1.2.0", exit_status=101, phase="pre"), console)

        assert console.messages[0] == "error: pre-bump hook #2 failed (exit 101): cargo bump 1.2.0"
        assert "nothing was bumped" in console.text

    def test_interrupted_hook(self) -> None:
        console = MockConsole()
        print_bump_error(HookFailed(0, "cargo publish", 130, "pre", interrupted=True), console)
        assert console.messages[0] == "error: pre-bump hook #1 interrupted: cargo publish"

    def test_hook_that_could_not_start(self) -> None:
        console = MockConsole()
        print_bump_error(HookFailed(0, "nope", -1, "pre"), console)
        assert console.messages[0] == "error: pre-bump hook #1 could not be run: nope"

    def test_bump_failed_with_hint(self) -> None:
        console = MockConsole()
        print_bump_error(BumpFailed("invalid version: 1.x", hint="use major, minor, patch"), console)
        assert console.messages == [
            "error: Version bump failed: invalid version: 1.x",
            "hint: use major, minor, patch",
        ]

    def test_post_hook_failure_lists_remaining_commands(self) -> None:
        console = MockConsole()
        cause = HookFailed(index=1, command="git push origin 1.2.0", exit_status=1, phase="post")
        error = PostHookFailedAfterBump(
            version="1.2.0",
            cause=cause,
            remaining=("git push origin 1.2.0", "cargo package", "cargo publish"),
        )

        print_bump_error(error, console)

        assert console.messages[0] == "error: post-bump hook #2 failed (exit 1): git push origin 1.2.0"
        assert console.find("version 1.2.0 was already bumped")[0].style == Style.WARNING
        assert console.messages[-3:] == [
            "  git push origin 1.2.0",
            "  cargo package",
            "  cargo publish",
        ]


class TestPrintConfigError:
    def test_with_path(self) -> None:
        console = MockConsole()
        error = MalformedConfig("pre_bump_hooks: expected a list of hooks", "pre_bump_hooks", Path("cog.toml"))

        print_config_error(error, console)

        assert console.messages == [
            "error: pre_bump_hooks: expected a list of hooks",
            "hint: cog.toml",
        ]
