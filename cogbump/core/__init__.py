"""Core domain types: config model, hook templates, results and exit codes."""

from .config import (
    AuthorMapping,
    ChangelogConfig,
    Config,
    MalformedConfig,
    Profile,
    find_config_file,
    load_config,
    parse_config,
)
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .template import BumpContext, Hook, ShellHook, StructuredHook, render_hook

__all__ = [
    # config
    "AuthorMapping",
    "ChangelogConfig",
    "Config",
    "MalformedConfig",
    "Profile",
    "find_config_file",
    "load_config",
    "parse_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # template
    "BumpContext",
    "Hook",
    "ShellHook",
    "StructuredHook",
    "render_hook",
]
