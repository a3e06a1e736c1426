"""
Touchstick - Configuration loader.

Loads runtime defaults from a .env file with sensible fallbacks.
The file is TOUCHSTICK_ENV_FILE when set, otherwise ./.env.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(os.getenv('TOUCHSTICK_ENV_FILE', str(Path.cwd() / '.env')))
load_dotenv(_env_path)


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


def _get_int(key: str, default: int) -> int:
    """Get int from environment."""
    return int(os.getenv(key, str(default)))


def _get_str(key: str, default: str) -> str:
    """Get lowercase string from environment."""
    return os.getenv(key, default).strip().lower()


# Stick defaults (applied when a stick is created without explicit values)
DEFAULT_RADIUS = _get_float('TOUCHSTICK_RADIUS', 75.0)  # input-space units
DEFAULT_DEAD_ZONE = _get_float('TOUCHSTICK_DEAD_ZONE', 0.0)  # [0, 1]
DEFAULT_BEHAVIOR = _get_str('TOUCHSTICK_BEHAVIOR', 'floating')  # fixed | floating | dynamic

# Stick events kept for TouchStickEngine.drain_events()
EVENT_QUEUE_LIMIT = _get_int('TOUCHSTICK_EVENT_QUEUE_LIMIT', 256)

# Pointer ids
MOUSE_POINTER_ID = 0  # the mouse is a single pointer
TOUCH_POINTER_OFFSET = 1  # finger ids are shifted so they never collide with the mouse

# Synthetic gamepad; picked at random to stay clear of real device instance ids
TOUCH_GAMEPAD_ID = 7213904417662853901
TOUCH_GAMEPAD_NAME = 'touchstick'
