from .config import Config, SelectionOptions
from .config_loader import ConfigLoader
from .errors import InvalidRegexError, SelectionError
from .filters import PatternSet
from .instrument import FunctionInfo, InstrumentationPass
from .reporter import Reporter
from .selector import Selector
from .types import HookPlan, Literal, MatchRequest, RegexPattern, SectionKind

__all__ = [
    "Config",
    "SelectionOptions",
    "ConfigLoader",
    "InvalidRegexError",
    "SelectionError",
    "PatternSet",
    "FunctionInfo",
    "InstrumentationPass",
    "Reporter",
    "Selector",
    "HookPlan",
    "Literal",
    "MatchRequest",
    "RegexPattern",
    "SectionKind",
]
