"""Configuration loaded from small YAML files.

Config files use a YAML subset: nested mappings of `key: value` lines,
comments, plain scalars and double-quoted strings. Values found in a file
are merged over the dataclass defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path

# --- YAML subset ---

_WORDS = {
    "true": True,
    "yes": True,
    "on": True,
    "false": False,
    "no": False,
    "off": False,
    "null": None,
    "~": None,
}

_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t"}


def parse_simple_yaml(text: str) -> dict:
    """Parse a config document into nested dicts.

    A key with nothing after its colon owns the following more deeply
    indented lines, or is None when there are none.

    Raises:
        ValueError: On a line that is not a `key: value` pair.
    """
    root: dict = {}
    # (indent of the owning key, mapping), innermost last
    stack: list[tuple[int, dict]] = [(-1, root)]
    open_key: tuple[int, dict, str] | None = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        content = _strip_comment(raw).strip()
        if not content:
            continue
        indent = len(raw) - len(raw.lstrip(" "))

        if open_key is not None:
            key_indent, owner, name = open_key
            open_key = None
            if indent > key_indent:
                owner[name] = {}
                stack.append((key_indent, owner[name]))
        while indent <= stack[-1][0]:
            stack.pop()

        key, colon, value = content.partition(":")
        key = key.strip()
        if not colon or not key or key.startswith("-"):
            raise ValueError(f"line {lineno}: expected 'key: value', got {content!r}")
        value = value.strip()
        mapping = stack[-1][1]
        if value:
            mapping[key] = _scalar(value)
        else:
            mapping[key] = None
            open_key = (indent, mapping, key)
    return root


def _strip_comment(line: str) -> str:
    quoted = escaped = False
    for i, ch in enumerate(line):
        if escaped:
            escaped = False
        elif quoted and ch == "\\":
            escaped = True
        elif ch == '"':
            quoted = not quoted
        elif ch == "#" and not quoted and (i == 0 or line[i - 1].isspace()):
            return line[:i]
    return line


def _scalar(value: str) -> str | int | float | bool | None:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return _unquote(value[1:-1])
    word = value.lower()
    if word in _WORDS:
        return _WORDS[word]
    for kind in (int, float):
        try:
            return kind(value)
        except ValueError:
            pass
    return value


def _unquote(body: str) -> str:
    out = []
    chars = iter(body)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            # Unknown escapes are kept as written
            out.append(_ESCAPES.get(nxt, ch + nxt))
        else:
            out.append(ch)
    return "".join(out)


# --- Configuration Dataclasses ---


@dataclass
class CompletionConfig:
    """Tab completion settings."""

    # Characters that mark a line as a command; the first one is inserted
    # when completing a line that lacks it.
    escape_markers: str = "/\\"


@dataclass
class HistoryConfig:
    """Command history settings."""

    max_size: int = 1000
    prefix_filter: bool = True


@dataclass
class CommandsConfig:
    """Submission settings."""

    # Command that receives lines typed without an escape marker
    default_command: str | None = None


@dataclass
class DebugConfig:
    """Debug log files."""

    enabled: bool = False
    directory: str = "."


@dataclass
class Config:
    """Complete console field configuration."""

    completion: CompletionConfig = field(default_factory=CompletionConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


# --- Loading ---


def _get_user_data_dir() -> Path:
    """Get the user's data directory ($HOME/.console-field)."""
    return Path.home() / ".console-field"


def _is_path(name_or_path: str) -> bool:
    return "/" in name_or_path or "\\" in name_or_path or name_or_path.endswith(".yml")


def _search_locations(name: str) -> list:
    """Places a named config is looked up, highest priority first."""
    filename = f"{name}.yml"
    return [
        _get_user_data_dir() / "configs" / filename,
        Path.cwd() / "configs" / filename,
        files("console_field") / "configs" / filename,
    ]


def load_config(name_or_path: str | None = None) -> Config:
    """Load a config by name or file path and merge it over the defaults.

    A missing "default" config yields the defaults; any other missing
    config raises FileNotFoundError. Unusable values raise ValueError.
    """
    config = Config()
    name = name_or_path or "default"

    if _is_path(name):
        source = Path(name).expanduser()
        if not source.is_file():
            raise FileNotFoundError(f"Config file not found: {source}")
    else:
        locations = _search_locations(name)
        source = next((loc for loc in locations if loc.is_file()), None)
        if source is None:
            if name == "default":
                return config
            searched = "".join(f"\n  - {loc}" for loc in locations)
            raise FileNotFoundError(f"Config '{name}' not found. Searched:{searched}")

    _merge_config(config, parse_simple_yaml(source.read_text(encoding="utf-8")))
    return config


def _merge_config(config: Config, data: dict):
    """Merge parsed YAML data into a Config object."""
    if not isinstance(data, dict):
        return

    completion = data.get("completion")
    if isinstance(completion, dict) and "escape_markers" in completion:
        markers = completion["escape_markers"]
        if not markers:
            raise ValueError("completion.escape_markers must not be empty")
        config.completion.escape_markers = str(markers)

    history = data.get("history")
    if isinstance(history, dict):
        if "max_size" in history:
            size = int(history["max_size"])
            if size < 1:
                raise ValueError(f"history.max_size must be positive, got {size}")
            config.history.max_size = size
        if "prefix_filter" in history:
            config.history.prefix_filter = bool(history["prefix_filter"])

    commands = data.get("commands")
    if isinstance(commands, dict) and "default_command" in commands:
        default = commands["default_command"]
        config.commands.default_command = str(default) if default else None

    debug = data.get("debug")
    if isinstance(debug, dict):
        if "enabled" in debug:
            config.debug.enabled = bool(debug["enabled"])
        if "directory" in debug and debug["directory"]:
            config.debug.directory = str(debug["directory"])


def get_default_config() -> Config:
    """Return a Config with all default values."""
    return Config()
