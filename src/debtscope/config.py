"""Configuration loading and management for debtscope.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.debtscope.toml)
    3. Project config (./debtscope.toml)
    4. Explicit config file
    5. Environment variables (DEBTSCOPE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4, top_n=10)
    >>> config.top_n
    10
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for an analysis run.

    Attributes:
        Corpus:
            extensions: File suffixes considered source text
            exclude_dirs: Directory names pruned during the walk
            max_file_size_mb: Larger files are skipped
            max_files: Stop enumerating after this many files

        Complexity:
            complexity_medium: Complexity above this is a medium finding
            complexity_high: Complexity above this is a high finding

        Duplication:
            duplicate_window: Lines per hashed window
            duplicate_min_line_chars: Trimmed lines this short or shorter are dropped
            duplicate_min_block_chars: Joined windows this short or shorter are skipped

        Effects:
            effect_hooks: Call names treated as effect signatures
            setter_prefix: Prefix of the state-setter naming convention

        Execution / output:
            workers: Thread pool size (None = auto-detect)
            top_n: Length of the ranked file lists
            verbosity: Logging verbosity level
    """

    # Corpus
    extensions: list[str] = field(default_factory=lambda: [".ts", ".tsx", ".js", ".jsx"])
    exclude_dirs: list[str] = field(
        default_factory=lambda: [
            "node_modules",
            ".git",
            "dist",
            "build",
            ".next",
            "coverage",
            "__tests__",
            "test-results",
        ]
    )
    max_file_size_mb: float = 10.0
    max_files: int = 10000

    # Complexity
    complexity_medium: int = 10
    complexity_high: int = 20

    # Duplication
    duplicate_window: int = 5
    duplicate_min_line_chars: int = 10
    duplicate_min_block_chars: int = 50

    # Effects
    effect_hooks: list[str] = field(default_factory=lambda: ["useEffect"])
    setter_prefix: str = "set"

    # Execution / output
    workers: Optional[int] = None
    top_n: int = 5
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "must start with '.'")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")

        if self.complexity_medium < 1:
            raise InvalidConfigError("complexity_medium", self.complexity_medium, "must be at least 1")
        if self.complexity_high < self.complexity_medium:
            raise InvalidConfigError(
                "complexity_high", self.complexity_high, "must be >= complexity_medium"
            )

        if self.duplicate_window < 2:
            raise InvalidConfigError("duplicate_window", self.duplicate_window, "must be at least 2")
        if self.duplicate_min_line_chars < 0:
            raise InvalidConfigError(
                "duplicate_min_line_chars", self.duplicate_min_line_chars, "must be non-negative"
            )
        if self.duplicate_min_block_chars < 0:
            raise InvalidConfigError(
                "duplicate_min_block_chars", self.duplicate_min_block_chars, "must be non-negative"
            )

        if not self.effect_hooks:
            raise InvalidConfigError("effect_hooks", self.effect_hooks, "must not be empty")
        if not self.setter_prefix.isidentifier():
            raise InvalidConfigError("setter_prefix", self.setter_prefix, "must be an identifier")

        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.top_n < 1:
            raise InvalidConfigError("top_n", self.top_n, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet/normal/verbose")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def worker_count(self) -> int:
        """Resolved thread pool size."""
        return self.workers or _DEFAULT_WORKERS


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unparseable
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".debtscope.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "debtscope.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DEBTSCOPE_* environment variables.

    List fields (extensions, exclude_dirs, effect_hooks) accept
    comma-separated values, e.g. ``DEBTSCOPE_EXTENSIONS=.ts,.tsx``.
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"DEBTSCOPE_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    A ``[debtscope]`` table is used when present, otherwise the top level.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("debtscope")
    return section if isinstance(section, dict) else data


default_config = AnalysisConfig()
