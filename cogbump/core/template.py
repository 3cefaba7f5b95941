"""Hook definitions and ``{{token}}`` substitution.

A hook is either a single shell string (``ShellHook``), which is how every
existing cog.toml spells it, or a program plus argument list
(``StructuredHook``) that is executed without a shell.

Hook text may reference the fields of ``BumpContext``: ``{{version}}`` and
``{{latest_version}}``. Whitespace inside the braces is allowed
(``{{ version }}``). Substitution is all or nothing: an unknown identifier
fails the whole render and no text is produced.
"""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = [
    "BumpContext",
    "Hook",
    "ShellHook",
    "StructuredHook",
    "hook_texts",
    "render_hook",
    "syntax_problem",
    "tokens_in",
]

_TOKEN_RE = re.compile(r"\{\{(.*?)\}\}")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class ShellHook:
    """A command string handed to the shell as-is."""

    command: str

    @property
    def display(self) -> str:
        return self.command


@dataclass(frozen=True, slots=True)
class StructuredHook:
    """A program and its arguments, executed without a shell."""

    program: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    @property
    def display(self) -> str:
        return shlex.join(self.argv)


Hook = ShellHook | StructuredHook


@dataclass(frozen=True, slots=True)
class BumpContext:
    """Values available to hook templates during one bump.

    Attributes:
        version: The version being bumped to.
        latest_version: The version before this bump.
    """

    version: str
    latest_version: str

    def values(self) -> dict[str, str]:
        return {"version": self.version, "latest_version": self.latest_version}


def hook_texts(hook: Hook) -> tuple[str, ...]:
    """All template-bearing strings of a hook, in order."""
    match hook:
        case ShellHook(command=command):
            return (command,)
        case StructuredHook(program=program, args=args):
            return (program, *args)


def tokens_in(text: str) -> list[str]:
    """Identifiers referenced by text, in order of appearance."""
    return [m.group(1).strip() for m in _TOKEN_RE.finditer(text)]


def syntax_problem(text: str) -> str | None:
    """Describe malformed token syntax in text, or None if it is well formed."""
    for name in tokens_in(text):
        if not _IDENTIFIER_RE.match(name):
            return f"invalid token name {{{{{name}}}}}"

    rest = _TOKEN_RE.sub("", text)
    if "{{" in rest:
        return "unmatched '{{'"
    if "}}" in rest:
        return "unmatched '}}'"
    return None


def _substitute(text: str, values: dict[str, str]) -> Result[str, str]:
    for name in tokens_in(text):
        if name not in values:
            return Err(name)
    return Ok(_TOKEN_RE.sub(lambda m: values[m.group(1).strip()], text))


def render_hook(hook: Hook, context: BumpContext) -> Result[Hook, str]:
    """Substitute every token of hook.

    Returns:
        Ok(rendered hook), or Err(identifier) for the first unknown token.
    """
    values = context.values()
    rendered: list[str] = []
    for text in hook_texts(hook):
        result = _substitute(text, values)
        if isinstance(result, Err):
            return result
        rendered.append(result.value)

    match hook:
        case ShellHook():
            return Ok(ShellHook(command=rendered[0]))
        case StructuredHook():
            return Ok(StructuredHook(program=rendered[0], args=tuple(rendered[1:])))
