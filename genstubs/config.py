"""Configuration loading for genstubs (.genstubs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".genstubs.yml"
DEFAULT_OUTPUT_DIR = "typings/genstubs"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CompilerConfig:
    """Compiler enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class GeneratorsConfig:
    """Overrides for the generator compiler's compiled-in constants."""

    root_class: Optional[str] = None
    builtin_namespaces: List[str] = field(default_factory=list)


@dataclass
class GenStubsConfig:
    """Represents the settings defined in .genstubs.yml."""

    root: Path
    modules: List[str] = field(default_factory=list)
    output_dir: Path | None = None
    compilers: CompilerConfig = field(default_factory=CompilerConfig)
    generators: GeneratorsConfig = field(default_factory=GeneratorsConfig)

    @property
    def resolved_output_dir(self) -> Path:
        return self.output_dir if self.output_dir is not None else self.root / DEFAULT_OUTPUT_DIR


def load_config(config_path: Path) -> GenStubsConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GenStubsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir_str = _as_str(data.get("output_dir"))
    output_dir = root / output_dir_str if output_dir_str else None

    compilers = CompilerConfig()
    compiler_data = _as_dict(data.get("compilers"))
    if compiler_data:
        compilers.enabled = _as_str_list(compiler_data.get("enabled"))

    generators = GeneratorsConfig()
    generator_data = _as_dict(data.get("generators"))
    if generator_data:
        generators.root_class = _as_str(generator_data.get("root_class"))
        generators.builtin_namespaces = _as_str_list(generator_data.get("builtin_namespaces"))

    return GenStubsConfig(
        root=root,
        modules=_as_str_list(data.get("modules")),
        output_dir=output_dir,
        compilers=compilers,
        generators=generators,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
