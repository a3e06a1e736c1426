"""
Stick definitions.

StickConfig is the creation-time configuration surface of a stick. It is
also the serializable form of a stick's public settings: dumping a stick
to a StickConfig and restoring it reproduces the same behavior.

Definitions can be kept in YAML:

    sticks:
      - id: move
        behavior: fixed
        dead_zone: 0.1
        gamepad: left_stick
      - id: look
        behavior: dynamic
        radius: 90
"""

from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from touchstick import config
from touchstick.behavior import StickBehavior
from touchstick.gamepad import GamepadMapping


class StickConfig(BaseModel):
    """Options recognized when creating a stick.

    Attributes:
        id: Application-supplied identifier (any hashable value)
        behavior: Positioning behavior (fixed, floating, dynamic)
        radius: Activation distance in input-space units
        dead_zone: Minimum axis magnitude before Drag events fire
        gamepad: Optional axis mapping for the gamepad bridge
    """
    id: Any
    behavior: StickBehavior = Field(default_factory=lambda: StickBehavior.parse(config.DEFAULT_BEHAVIOR))
    radius: float = Field(default_factory=lambda: config.DEFAULT_RADIUS, gt=0)
    dead_zone: float = Field(default_factory=lambda: config.DEFAULT_DEAD_ZONE, ge=0, le=1)
    gamepad: Optional[GamepadMapping] = None

    model_config = ConfigDict(frozen=True)

    @field_validator('id')
    @classmethod
    def validate_hashable_id(cls, v: Any) -> Any:
        """Stick ids are used as dict keys and must be hashable."""
        if v is None:
            raise ValueError('Stick id is required')
        try:
            hash(v)
        except TypeError:
            raise ValueError(f'Stick id must be hashable, got {type(v).__name__}')
        return v

    @field_validator('behavior', mode='before')
    @classmethod
    def parse_behavior(cls, v: Any) -> StickBehavior:
        return StickBehavior.parse(v)

    @field_validator('gamepad', mode='before')
    @classmethod
    def parse_gamepad(cls, v: Any) -> Any:
        """Accept a preset name in place of an explicit mapping."""
        if isinstance(v, str):
            return GamepadMapping.from_name(v)
        return v


def load_stick_configs(path: Union[str, Path]) -> List[StickConfig]:
    """Load stick definitions from a YAML file.

    Args:
        path: YAML file with a top-level 'sticks' list

    Returns:
        One StickConfig per entry, in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or an entry is invalid
    """
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    entries = data.get('sticks') if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a top-level 'sticks' list")

    configs = []
    for index, entry in enumerate(entries):
        try:
            configs.append(StickConfig.model_validate(entry))
        except ValidationError as e:
            raise ValueError(f"{path}: invalid stick definition #{index}: {e}") from e

    ids = [c.id for c in configs]
    duplicates = sorted({str(i) for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValueError(f"{path}: duplicate stick ids: {', '.join(duplicates)}")
    return configs
