from .config import MeterConfig, load_meter_config, parse_rigctld_address
from .listener import InputListener
from .polling import PollingLoop
from .renderer import ERASE_STRATEGIES, LineRenderer
from .runtime import create_sample_source, import_hamlib, list_models
from .session import MeterSession

__all__ = [
    "ERASE_STRATEGIES",
    "InputListener",
    "LineRenderer",
    "MeterConfig",
    "MeterSession",
    "PollingLoop",
    "create_sample_source",
    "import_hamlib",
    "list_models",
    "load_meter_config",
    "parse_rigctld_address",
]
