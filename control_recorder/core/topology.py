"""
Static topology of a control runtime: loops, their controllers, state
machines and rules.

The recorder only reads identifiers and controller kinds from these models;
tuning parameters are carried so that a full runtime description round-trips
through YAML, but they play no part in recording.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Annotated

__all__ = [
    "PidConfig",
    "BangBangConfig",
    "ControllerConfig",
    "Loop",
    "RuntimeTopology",
    "load_topology",
]


class PidConfig(BaseModel):
    """Proportional-integral-derivative controller parameters."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    FIELDS: ClassVar[Tuple[str, ...]] = ("target", "prev_value", "p", "i", "d")

    kind: Literal["pid"] = "pid"
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0
    min_output: float | None = None
    max_output: float | None = None


class BangBangConfig(BaseModel):
    """Two-state controller switching around a threshold."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    FIELDS: ClassVar[Tuple[str, ...]] = ("threshold", "current")

    kind: Literal["bb"] = "bb"
    default_threshold: float = 0.0
    hysteresis: float = Field(default=0.0, ge=0.0)
    invert: bool = False


ControllerConfig = Annotated[
    Union[PidConfig, BangBangConfig], Field(discriminator="kind")
]


class Loop(BaseModel):
    """A control loop: one setpoint, its inputs, outputs and controller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    inputs: List[str] = Field(default_factory=list)
    outputs: List[str] = Field(default_factory=list)
    controller: ControllerConfig

    @field_validator("id")
    @classmethod
    def _validate_id(cls, v: str) -> str:
        if not v:
            raise ValueError("loop id must not be empty")
        return v


class RuntimeTopology(BaseModel):
    """Everything a runtime declares up front.

    ``state_machines`` and ``rules`` hold identifiers only; their current
    values arrive with each ``SystemState``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    loops: List[Loop] = Field(default_factory=list)
    state_machines: List[str] = Field(default_factory=list)
    rules: List[str] = Field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeTopology":
        return load_topology(path)


def load_topology(path: str | Path) -> RuntimeTopology:
    """Load and validate a runtime topology from a YAML file.

    Raises:
        ConfigurationError: if the file is missing, unreadable or invalid.
    """
    from pydantic import ValidationError

    from ..config import load_yaml_mapping
    from ..exceptions import ConfigurationError

    raw = load_yaml_mapping(path, what="topology")
    try:
        return RuntimeTopology.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid topology {path}: {e}") from e
