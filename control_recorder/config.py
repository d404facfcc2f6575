"""
Recorder configuration.

``RecorderConfig`` fixes the column schema of one recorder instance. It can be
built in code, derived from a runtime topology, or loaded from YAML with
dotlist overrides such as ``key_list=[in.a,out.b]``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.topology import RuntimeTopology
from .exceptions import ConfigurationError
from .keys import runtime_keys, select_keys

__all__ = [
    "TIMESTAMP_COLUMN",
    "RecorderConfig",
    "load_yaml_mapping",
    "load_recorder_config",
]

TIMESTAMP_COLUMN = "timestamp_utc"


class RecorderConfig(BaseModel):
    """CSV recorder configuration.

    Attributes:
        file_name: target CSV file, opened in append mode
        key_list: ordered column schema (after the timestamp column)
        time_format: optional ``strftime`` format for the timestamp column;
            epoch milliseconds when unset
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    file_name: Path
    key_list: List[str] = Field(default_factory=list)
    time_format: Optional[str] = None

    @field_validator("key_list")
    @classmethod
    def _validate_key_list(cls, v: List[str]) -> List[str]:
        seen = set()
        for key in v:
            if not key:
                raise ValueError("key_list entries must not be empty")
            if key == TIMESTAMP_COLUMN:
                raise ValueError(f"'{TIMESTAMP_COLUMN}' is reserved")
            if key in seen:
                raise ValueError(f"Duplicate key in key_list: {key}")
            seen.add(key)
        return v

    @field_validator("time_format")
    @classmethod
    def _validate_time_format(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def for_runtime(
        cls,
        file_name: str | Path,
        runtime: RuntimeTopology,
        *,
        include: Optional[Iterable[str]] = None,
        time_format: Optional[str] = None,
    ) -> "RecorderConfig":
        """Build a config recording every key of ``runtime`` matching ``include``."""
        keys = select_keys(runtime_keys(runtime), include)
        return cls(file_name=Path(file_name), key_list=keys, time_format=time_format)

    def header(self) -> List[str]:
        return [TIMESTAMP_COLUMN, *self.key_list]


def load_yaml_mapping(
    path: str | Path,
    *,
    overrides: Optional[Sequence[str]] = None,
    what: str = "config",
) -> Dict[str, Any]:
    """Load a YAML mapping with OmegaConf and apply dotlist overrides.

    Raises:
        ConfigurationError: if the file is missing, unreadable, not a mapping,
            or the overrides cannot be parsed.
    """
    import yaml
    from omegaconf import DictConfig, OmegaConf
    from omegaconf.errors import OmegaConfBaseException

    yaml_path = Path(path)
    if not yaml_path.exists():
        raise ConfigurationError(f"{what.capitalize()} file not found: {yaml_path}")
    try:
        cfg = OmegaConf.load(yaml_path)
    except (OmegaConfBaseException, yaml.YAMLError, OSError) as e:
        raise ConfigurationError(f"Unable to read {what} {yaml_path}: {e}") from e

    if not isinstance(cfg, DictConfig):
        raise ConfigurationError(f"{what.capitalize()} {yaml_path} is not a mapping")

    if overrides:
        try:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
        except (OmegaConfBaseException, yaml.YAMLError) as e:
            raise ConfigurationError(
                "Failed to parse overrides: " + ", ".join(overrides)
            ) from e

    try:
        return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]
    except OmegaConfBaseException as e:
        raise ConfigurationError(f"Unable to resolve {what} {yaml_path}: {e}") from e


def load_recorder_config(
    path: str | Path, overrides: Optional[Sequence[str]] = None
) -> RecorderConfig:
    """Load a ``RecorderConfig`` from YAML.

    A relative ``file_name`` is resolved against the directory of the YAML file.
    """
    raw = load_yaml_mapping(path, overrides=overrides, what="recorder config")
    try:
        cfg = RecorderConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid recorder config {path}: {e}") from e
    if not cfg.file_name.is_absolute():
        cfg = cfg.model_copy(
            update={"file_name": Path(path).parent / cfg.file_name}
        )
    return cfg
