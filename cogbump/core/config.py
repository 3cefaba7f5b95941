"""Typed model of cog.toml.

The file is parsed once per process into frozen dataclasses. Parsing is a
pure function of the text (``parse_config``); file access lives in
``load_config`` and ``find_config_file``.

Only the keys cogbump acts on are validated. Other cocogitto settings
(``branch_whitelist``, ``skip_ci`` ...) are ignored so existing files load
unchanged.

Every top-level key is optional, with cocogitto's defaults: no hooks, no
profiles, ``CHANGELOG.md`` rendered with the ``default`` template. A key
that is present must be well formed: ``changelog.path`` and
``changelog.template`` may not be empty, and ``template = "remote"``
requires ``remote``, ``repository`` and ``owner``.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .result import Err, Ok, Result
from .structured import StrDict, as_obj_list, as_str_dict, is_str_list
from .template import Hook, ShellHook, StructuredHook, hook_texts, syntax_problem

__all__ = [
    "AuthorMapping",
    "CONFIG_FILE_NAME",
    "ChangelogConfig",
    "Config",
    "MalformedConfig",
    "Profile",
    "find_config_file",
    "load_config",
    "parse_config",
]

CONFIG_FILE_NAME = "cog.toml"

DEFAULT_CHANGELOG_PATH = "CHANGELOG.md"
DEFAULT_CHANGELOG_TEMPLATE = "default"
REMOTE_TEMPLATE = "remote"
REMOTE_TEMPLATE_FIELDS = ("remote", "repository", "owner")


@dataclass(frozen=True, slots=True)
class MalformedConfig:
    """The config text is not a valid cog.toml.

    Attributes:
        message: What is wrong.
        field: Dotted name of the offending field, if any.
        path: File the text was read from, if known.
    """

    message: str
    field: str | None = None
    path: Path | None = None

    @property
    def hint(self) -> str | None:
        if self.path is None:
            return None
        return str(self.path)


@dataclass(frozen=True, slots=True)
class AuthorMapping:
    """Maps a code-hosting account to the name shown in the changelog."""

    username: str
    signature: str


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    """The ``[changelog]`` table.

    The path is not required to exist; the changelog may be created later.
    """

    path: str = DEFAULT_CHANGELOG_PATH
    template: str = DEFAULT_CHANGELOG_TEMPLATE
    remote: str | None = None
    repository: str | None = None
    owner: str | None = None
    authors: tuple[AuthorMapping, ...] = ()

    @property
    def remote_url(self) -> str | None:
        """Web URL of the repository, when remote, owner and repository are set."""
        if not (self.remote and self.owner and self.repository):
            return None
        return f"https://{self.remote}/{self.owner}/{self.repository}"

    def signature_for(self, username: str) -> str | None:
        for author in self.authors:
            if author.username == username:
                return author.signature
        return None


@dataclass(frozen=True, slots=True)
class Profile:
    """A named set of hooks that replaces the default ones.

    ``None`` means the profile does not set that list and the base list
    applies. An empty tuple is an explicit override with no hooks.
    """

    name: str
    pre_bump_hooks: tuple[Hook, ...] | None = None
    post_bump_hooks: tuple[Hook, ...] | None = None


def _no_profiles() -> Mapping[str, Profile]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Config:
    """Root of cog.toml."""

    pre_bump_hooks: tuple[Hook, ...] = ()
    post_bump_hooks: tuple[Hook, ...] = ()
    profiles: Mapping[str, Profile] = field(default_factory=_no_profiles)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    tag_prefix: str = ""


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


class _Invalid(Exception):
    """Internal: aborts parsing with a field name and message."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def _parse_hook(value: object, name: str) -> Hook:
    hook: Hook
    if isinstance(value, str):
        hook = ShellHook(command=value)
    else:
        table = as_str_dict(value)
        if table is None:
            raise _Invalid(name, "hook must be a string or a {program, args} table")
        program = table.get("program")
        if not isinstance(program, str) or not program.strip():
            raise _Invalid(f"{name}.program", "structured hook needs a non-empty 'program'")
        args = table.get("args", [])
        if not is_str_list(args):
            raise _Invalid(f"{name}.args", "'args' must be a list of strings")
        hook = StructuredHook(program=program, args=tuple(args))

    for text in hook_texts(hook):
        problem = syntax_problem(text)
        if problem is not None:
            raise _Invalid(name, f"{problem} in hook: {text}")
    return hook


def _parse_hooks(value: object, name: str) -> tuple[Hook, ...]:
    items = as_obj_list(value)
    if items is None:
        raise _Invalid(name, "expected a list of hooks")
    return tuple(_parse_hook(item, f"{name}[{i}]") for i, item in enumerate(items))


def _optional_hooks(table: StrDict, key: str, prefix: str) -> tuple[Hook, ...] | None:
    if key not in table:
        return None
    return _parse_hooks(table[key], f"{prefix}{key}")


def _optional_str(table: StrDict, key: str, prefix: str) -> str | None:
    if key not in table:
        return None
    value = table[key]
    if not isinstance(value, str):
        raise _Invalid(f"{prefix}{key}", "expected a string")
    return value


def _non_empty_str(table: StrDict, key: str, prefix: str, default: str) -> str:
    value = _optional_str(table, key, prefix)
    if value is None:
        return default
    if not value.strip():
        raise _Invalid(f"{prefix}{key}", "must not be empty")
    return value


def _optional_table(table: StrDict, key: str, name: str) -> StrDict:
    if key not in table:
        return {}
    sub = as_str_dict(table[key])
    if sub is None:
        raise _Invalid(name, "expected a table")
    return sub


def _parse_profiles(root: StrDict) -> Mapping[str, Profile]:
    table = _optional_table(root, "bump_profiles", "bump_profiles")
    profiles: dict[str, Profile] = {}
    for name, value in table.items():
        prefix = f"bump_profiles.{name}."
        body = as_str_dict(value)
        if body is None:
            raise _Invalid(f"bump_profiles.{name}", "profile must be a table")
        profiles[name] = Profile(
            name=name,
            pre_bump_hooks=_optional_hooks(body, "pre_bump_hooks", prefix),
            post_bump_hooks=_optional_hooks(body, "post_bump_hooks", prefix),
        )
    return MappingProxyType(profiles)


def _parse_authors(value: object) -> tuple[AuthorMapping, ...]:
    items = as_obj_list(value)
    if items is None:
        raise _Invalid("changelog.authors", "expected a list of {username, signature} tables")

    authors: list[AuthorMapping] = []
    seen: set[str] = set()
    for i, item in enumerate(items):
        name = f"changelog.authors[{i}]"
        entry = as_str_dict(item)
        if entry is None:
            raise _Invalid(name, "author must be a {username, signature} table")
        username = entry.get("username")
        if not isinstance(username, str):
            raise _Invalid(f"{name}.username", "missing or not a string")
        signature = entry.get("signature")
        if not isinstance(signature, str):
            raise _Invalid(f"{name}.signature", "missing or not a string")
        if username in seen:
            raise _Invalid(f"{name}.username", f"duplicate author username: {username}")
        seen.add(username)
        authors.append(AuthorMapping(username=username, signature=signature))
    return tuple(authors)


def _parse_changelog(root: StrDict) -> ChangelogConfig:
    table = _optional_table(root, "changelog", "changelog")
    prefix = "changelog."
    changelog = ChangelogConfig(
        path=_non_empty_str(table, "path", prefix, DEFAULT_CHANGELOG_PATH),
        template=_non_empty_str(table, "template", prefix, DEFAULT_CHANGELOG_TEMPLATE),
        remote=_optional_str(table, "remote", prefix),
        repository=_optional_str(table, "repository", prefix),
        owner=_optional_str(table, "owner", prefix),
        authors=_parse_authors(table["authors"]) if "authors" in table else (),
    )

    if changelog.template == REMOTE_TEMPLATE:
        for key in REMOTE_TEMPLATE_FIELDS:
            if not getattr(changelog, key):
                raise _Invalid(f"{prefix}{key}", f"required when template = {REMOTE_TEMPLATE!r}")
    return changelog


def _from_dict(root: StrDict) -> Config:
    return Config(
        pre_bump_hooks=_optional_hooks(root, "pre_bump_hooks", "") or (),
        post_bump_hooks=_optional_hooks(root, "post_bump_hooks", "") or (),
        profiles=_parse_profiles(root),
        changelog=_parse_changelog(root),
        tag_prefix=_optional_str(root, "tag_prefix", "") or "",
    )


def parse_config(raw_text: str, path: Path | None = None) -> Result[Config, MalformedConfig]:
    """Parse cog.toml text into a Config.

    Args:
        raw_text: The TOML document.
        path: Source file, only used in error reports.

    Returns:
        Ok(Config) on success, Err(MalformedConfig) naming the bad field.
    """
    try:
        data: object = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError as e:
        return Err(MalformedConfig(f"Invalid TOML syntax: {e}", path=path))

    root = as_str_dict(data)
    if root is None:
        return Err(MalformedConfig("Config root must be a TOML table", path=path))

    try:
        return Ok(_from_dict(root))
    except _Invalid as e:
        return Err(MalformedConfig(f"{e.field}: {e.message}", field=e.field, path=path))


def load_config(path: Path) -> Result[Config, MalformedConfig]:
    """Read and parse a cog.toml file."""
    try:
        text = path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        return Err(MalformedConfig(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(MalformedConfig(f"Permission denied reading: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(MalformedConfig(f"Error reading config: {e}", path=path))
    return parse_config(text, path=path)


def find_config_file(start: Path, name: str = CONFIG_FILE_NAME) -> Path | None:
    """Search upward from start for a config file."""
    for parent in (start, *start.parents):
        candidate = parent / name
        if candidate.is_file():
            return candidate
    return None
