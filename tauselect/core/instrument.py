"""
Instrumentation pass - run the selector over a unit's functions
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from .config import SelectionOptions
from .selector import Demangler, Selector
from .types import HookPlan, MatchRequest


class FunctionRecord(Protocol):
    """What the pass needs to know about a compiled function."""

    name: str
    debug_filename: Optional[str]
    module_source_filename: str


@dataclass
class FunctionInfo:
    """Plain FunctionRecord.

    Attributes:
        name: Raw (possibly mangled) symbol name.
        module_source_filename: Source file recorded for the compilation unit.
        debug_filename: File from the function's debug location, if any.
    """

    name: str
    module_source_filename: str = ""
    debug_filename: Optional[str] = None


class Instrumenter(Protocol):
    """Inserts the hook calls into a function."""

    def instrument(self, record: FunctionRecord, plan: HookPlan) -> bool:
        """
        Insert ``plan.start_func`` before the entry point and
        ``plan.stop_func`` before each return point.

        Returns:
            True if the function was modified
        """
        ...


def source_file_of(record: FunctionRecord) -> str:
    """Debug location file when compiled with -g, else the unit's source file."""
    if record.debug_filename:
        return record.debug_filename
    return record.module_source_filename


class InstrumentationPass:
    """
    Decides for every function of a unit and hands the positive ones
    to an Instrumenter, unless running dry.
    """

    def __init__(
        self,
        selector: Selector,
        options: SelectionOptions,
        instrumenter: Optional[Instrumenter] = None,
        demangle: Optional[Demangler] = None,
    ):
        """
        Initialize the pass.

        Args:
            selector: Decision engine built from the run's Config
            options: Command-line values (hook names, dry run)
            instrumenter: Mutation step; None behaves like a dry run
            demangle: Maps raw symbol names to readable ones (defaults
                to the selector's)
        """
        self.selector = selector
        self.options = options
        self.instrumenter = instrumenter
        self.demangle = demangle or selector.demangle
        self.stats: Dict[str, Any] = {
            "functions_seen": 0,
            "functions_selected": 0,
            "functions_instrumented": 0,
        }

    def plan_for(self, record: FunctionRecord) -> Optional[HookPlan]:
        """
        Decide for one function.

        Returns:
            The hooks to insert, or None if the function is skipped
        """
        readable = self.demangle(record.name) or ""
        request = MatchRequest(function_name=readable, source_file=source_file_of(record))
        if not self.selector.decide(request):
            return None
        return HookPlan(
            function_name=readable,
            start_func=self.options.start_func,
            stop_func=self.options.stop_func,
        )

    def _run(self, record: FunctionRecord) -> Tuple[Optional[HookPlan], bool]:
        self.stats["functions_seen"] += 1
        plan = self.plan_for(record)
        if plan is None:
            return None, False
        self.stats["functions_selected"] += 1

        if self.options.dry_run or self.instrumenter is None:
            return plan, False

        self.selector.reporter.adding_instrumentation(plan.function_name)
        modified = self.instrumenter.instrument(record, plan)
        if modified:
            self.stats["functions_instrumented"] += 1
        return plan, modified

    def run_on_function(self, record: FunctionRecord) -> bool:
        """
        Decide for one function and instrument it when selected.

        Returns:
            True if the function was modified
        """
        _, modified = self._run(record)
        return modified

    def apply(self, records: Iterable[FunctionRecord]) -> List[HookPlan]:
        """
        Run over all functions of a unit.

        Returns:
            Hook plans of the selected functions, in input order
        """
        plans: List[HookPlan] = []
        for record in records:
            plan, _ = self._run(record)
            if plan is not None:
                plans.append(plan)
        return plans

    def get_stats(self) -> Dict[str, Any]:
        return self.stats
