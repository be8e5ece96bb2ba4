from .config import (
    SimulationConfig,
    active_config,
    clear_config,
    get_config,
    require_config,
    set_config,
)
from .sender import Sender
from .series import Series

__all__ = [
    "Series",
    "Sender",
    "SimulationConfig",
    "set_config",
    "get_config",
    "clear_config",
    "require_config",
    "active_config",
]
