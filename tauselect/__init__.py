"""tauselect - choose the functions that get profiling hooks.

Reads a selection file of included/excluded functions and source files
and decides, function by function, whether start/stop calls should be
inserted around it.
"""

from .core.config import Config, SelectionOptions
from .core.config_loader import ConfigLoader
from .core.instrument import FunctionInfo, InstrumentationPass
from .core.reporter import Reporter
from .core.selector import Selector
from .core.types import MatchRequest

__all__ = [
    "Config",
    "SelectionOptions",
    "ConfigLoader",
    "FunctionInfo",
    "InstrumentationPass",
    "Reporter",
    "Selector",
    "MatchRequest",
]
