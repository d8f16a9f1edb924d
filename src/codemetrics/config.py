"""Configuration loading and management for codemetrics.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in MetricsConfiguration)
    2. Global config (~/.codemetrics.toml)
    3. Project config (./codemetrics.toml)
    4. Explicit config file
    5. Environment variables (CODEMETRICS_* prefix)
    6. Keyword overrides (typically CLI flags)

The resulting configuration is read-only and is shared by every analysis
request; nothing in the pipeline mutates it.

Example:
    >>> config = load_config(minimum_visible_complexity=10)
    >>> config.minimum_visible_complexity
    10
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError


@dataclass(frozen=True)
class ScriptMetricsConfiguration:
    """Cost of each construct counted by the script metrics engine.

    A cost of 0 means the construct is not reported at all. Function-like
    and class nodes are the only visible ones; everything else only adds to
    the collected complexity of its enclosing node.
    """

    # === Declarations (visible) ===
    function_declaration: int = 1
    function_expression: int = 1
    arrow_function: int = 1
    method_declaration: int = 1
    class_declaration: int = 0

    # === Branches ===
    if_statement: int = 1
    else_clause: int = 0
    case_clause: int = 1
    default_clause: int = 0
    conditional_expression: int = 1

    # === Loops ===
    for_statement: int = 1
    for_in_statement: int = 1
    while_statement: int = 1
    do_statement: int = 1

    # === Exceptions and jumps ===
    catch_clause: int = 1
    throw_statement: int = 0
    break_statement: int = 0
    continue_statement: int = 0

    # === Operators ===
    logical_operator: int = 1  # && and ||
    nullish_coalescing: int = 1  # ??

    def __post_init__(self) -> None:
        """Costs must be non-negative integers."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"script.{f.name} must be a non-negative integer")


@dataclass(frozen=True)
class LuaStatementMetricsConfiguration:
    """Cost of each statement counted by the Lua statement engine."""

    function_declaration: int = 1
    if_statement: int = 1
    elseif_clause: int = 1
    else_clause: int = 0
    while_statement: int = 1
    for_statement: int = 1
    repeat_statement: int = 1
    logical_operator: int = 1  # and / or
    goto_statement: int = 1
    break_statement: int = 0

    def __post_init__(self) -> None:
        """Costs must be non-negative integers."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"lua.{f.name} must be a non-negative integer")


@dataclass(frozen=True)
class MetricsConfiguration:
    """Configuration for a metrics analysis request.

    Attributes:
        File filtering:
            exclude: Glob patterns matched against the document URI
            file_size_limit_mb: Maximum document size (MB, negative = no limit)

        Language switches:
            enabled_for_ts, enabled_for_tsx, enabled_for_js, enabled_for_jsx,
            enabled_for_lua, enabled_for_vue, enabled_for_html

        Visibility:
            minimum_visible_complexity: Nodes below this collected complexity
                are not surfaced
            diagnostics_enabled: Emit editor diagnostics for surfaced nodes

        Rendering:
            complexity_template: Message template, {0} = complexity,
                {1} = level description
            complexity_level_*: Lower bounds of each complexity level
            complexity_level_*_description: Text used for {1}

        Engines:
            script: Costs for the tree-sitter script engine
            lua: Costs for the Lua statement engine
    """

    # File filtering
    exclude: tuple[str, ...] = (
        "**/.git/**",
        "**/node_modules/**",
        "**/bower_components/**",
    )
    file_size_limit_mb: float = 0.5

    # Language switches
    enabled_for_ts: bool = True
    enabled_for_tsx: bool = True
    enabled_for_js: bool = True
    enabled_for_jsx: bool = True
    enabled_for_lua: bool = True
    enabled_for_vue: bool = True
    enabled_for_html: bool = True

    # Visibility
    minimum_visible_complexity: int = 5
    diagnostics_enabled: bool = False

    # Rendering
    complexity_template: str = "Complexity is {0} {1}"
    complexity_level_extreme: int = 25
    complexity_level_high: int = 10
    complexity_level_normal: int = 5
    complexity_level_low: int = 0
    complexity_level_extreme_description: str = "Bloody hell..."
    complexity_level_high_description: str = "You must be kidding"
    complexity_level_normal_description: str = "It's time to do something..."
    complexity_level_low_description: str = "Everything is cool!"

    # Engines (nested config)
    script: ScriptMetricsConfiguration = field(default_factory=ScriptMetricsConfiguration)
    lua: LuaStatementMetricsConfiguration = field(
        default_factory=LuaStatementMetricsConfiguration
    )

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if isinstance(self.exclude, str) or not all(isinstance(p, str) for p in self.exclude):
            raise ValueError("exclude must be a list of glob patterns")
        # TOML arrays and keyword overrides arrive as lists
        object.__setattr__(self, "exclude", tuple(self.exclude))
        if not isinstance(self.minimum_visible_complexity, int):
            raise ValueError("minimum_visible_complexity must be an integer")

        levels = (
            self.complexity_level_low,
            self.complexity_level_normal,
            self.complexity_level_high,
            self.complexity_level_extreme,
        )
        if list(levels) != sorted(levels):
            raise ValueError(
                "complexity levels must be ordered: low <= normal <= high <= extreme"
            )

    def level_description(self, complexity: int) -> str:
        """Description of the highest level reached by ``complexity``."""
        if complexity >= self.complexity_level_extreme:
            return self.complexity_level_extreme_description
        if complexity >= self.complexity_level_high:
            return self.complexity_level_high_description
        if complexity >= self.complexity_level_normal:
            return self.complexity_level_normal_description
        return self.complexity_level_low_description


# Default configuration (singleton)
default_config = MetricsConfiguration()

_NESTED_SECTIONS = {
    "script": ScriptMetricsConfiguration,
    "lua": LuaStatementMetricsConfiguration,
}


def load_config(config_file: Optional[Path] = None, **overrides) -> MetricsConfiguration:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated MetricsConfiguration instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".codemetrics.toml"
    if global_config.exists():
        _merge(merged, _load_toml_file(global_config))

    project_config = Path.cwd() / "codemetrics.toml"
    if project_config.exists():
        _merge(merged, _load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(merged, _load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    for section, cls in _NESTED_SECTIONS.items():
        value = merged.pop(section, None)
        if value is None:
            continue
        if isinstance(value, cls):
            merged[section] = value
        elif isinstance(value, dict):
            try:
                merged[section] = cls(**value)
            except TypeError as e:
                raise ConfigurationError(f"Invalid [{section}] config: {e}")
            except ValueError as e:
                raise InvalidConfigError(section, value, str(e))
        else:
            raise InvalidConfigError(section, value, "expected a table")

    try:
        return MetricsConfiguration(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise InvalidConfigError("configuration", merged, str(e))


def _merge(merged: dict, loaded: dict) -> None:
    """Merge a loaded TOML document, combining nested tables key by key."""
    for key, value in loaded.items():
        if key in _NESTED_SECTIONS and isinstance(value, dict):
            section = dict(merged.get(key) or {})
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODEMETRICS_* environment variables.

    Supported environment variables (scalar fields only):
        CODEMETRICS_FILE_SIZE_LIMIT_MB: float
        CODEMETRICS_MINIMUM_VISIBLE_COMPLEXITY: int
        CODEMETRICS_DIAGNOSTICS_ENABLED: bool (true/false/1/0)
        CODEMETRICS_ENABLED_FOR_<LANG>: bool
        CODEMETRICS_COMPLEXITY_TEMPLATE: str

    Returns:
        Dict of field_name -> parsed_value for any CODEMETRICS_* vars found.
    """
    type_hints = get_type_hints(MetricsConfiguration)

    result: dict[str, Any] = {}

    for field_name in MetricsConfiguration.__dataclass_fields__:
        env_key = f"CODEMETRICS_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be expressed as a single variable
    (lists, nested sections).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Python 3.9-3.10 get the same parser from the tomli backport
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
