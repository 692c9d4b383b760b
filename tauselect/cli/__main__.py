from __future__ import annotations

import json
import logging
import sys
from typing import List, Optional, Tuple

import typer
import yaml

from ..core.config import DEFAULT_START_FUNC, DEFAULT_STOP_FUNC, Config, SelectionOptions
from ..core.errors import InvalidRegexError
from ..core.instrument import FunctionInfo, FunctionRecord, InstrumentationPass
from ..core.reporter import Reporter
from ..core.selector import Selector
from ..core.types import HookPlan

app = typer.Typer(help="Choose the functions that get profiling hooks")

INPUT_FILE = typer.Option(
    None, "--tau-input-file", help="File containing the names of functions to instrument"
)
START_FUNC = typer.Option(
    DEFAULT_START_FUNC, "--tau-start-func", help="Profiling function called before functions of interest"
)
STOP_FUNC = typer.Option(
    DEFAULT_STOP_FUNC, "--tau-stop-func", help="Profiling function called after functions of interest"
)
REGEX = typer.Option("", "--tau-regex", help="Regex identifying functions of interest (case-sensitive)")
IREGEX = typer.Option("", "--tau-iregex", help="Regex identifying functions of interest (case-insensitive)")
DRY_RUN = typer.Option(
    False, "--tau-dry-run", help="Don't instrument, just print what would be instrumented"
)
VERBOSE = typer.Option(False, "--verbose", "-v", help="Print loaded entries and decisions")


def _configure_logging() -> None:
    # informational messages are echoed by the Reporter when verbose
    logging.basicConfig(
        level=logging.WARNING,
        stream=sys.stderr,
        format="%(message)s",
    )


def _load(options: SelectionOptions, verbose: bool) -> Tuple[Config, Reporter]:
    _configure_logging()
    reporter = Reporter(verbose=verbose)
    try:
        cfg = Config.from_options(options, reporter=reporter)
    except InvalidRegexError as e:
        raise typer.BadParameter(str(e), param_hint=e.option) from e
    return cfg, reporter


@app.command()
def decide(
    name: str,
    file: str = typer.Argument("", help="Source file of the function"),
    input_file: Optional[str] = INPUT_FILE,
    regex: str = REGEX,
    iregex: str = IREGEX,
    verbose: bool = VERBOSE,
):
    """Print whether NAME defined in FILE would be instrumented."""
    options = SelectionOptions(input_file=input_file, regex=regex, iregex=iregex)
    cfg, reporter = _load(options, verbose)
    selected = Selector(cfg, reporter=reporter).decide_raw(name, file)
    typer.echo("true" if selected else "false")


@app.command()
def show(
    input_file: Optional[str] = INPUT_FILE,
    regex: str = REGEX,
    iregex: str = IREGEX,
    fmt: str = typer.Option("json", "--format", help="json or yaml"),
    verbose: bool = VERBOSE,
):
    """Dump the loaded selection."""
    if fmt not in ("json", "yaml"):
        raise typer.BadParameter("format must be json or yaml", param_hint="--format")
    options = SelectionOptions(input_file=input_file, regex=regex, iregex=iregex)
    cfg, _ = _load(options, verbose)
    if fmt == "yaml":
        typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False), nl=False)
    else:
        typer.echo(json.dumps(cfg.to_dict(), indent=2))


class EchoInstrumenter:
    """Prints the hook calls it would insert instead of changing any code."""

    def instrument(self, record: FunctionRecord, plan: HookPlan) -> bool:
        typer.echo(
            f"Adding {plan.start_func}/{plan.stop_func} around {plan.function_name}",
            err=True,
        )
        return True


def _read_listing(listing: str) -> List[FunctionInfo]:
    if listing == "-":
        lines = sys.stdin.read().splitlines()
    else:
        with open(listing, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    records = []
    for line in lines:
        if not line.strip():
            continue
        fields = line.split("\t")
        records.append(
            FunctionInfo(
                name=fields[0],
                module_source_filename=fields[1] if len(fields) > 1 else "",
                debug_filename=fields[2] if len(fields) > 2 and fields[2] else None,
            )
        )
    return records


@app.command()
def plan(
    listing: str = typer.Argument(..., help="name<TAB>file[<TAB>debug file] lines, or - for stdin"),
    input_file: Optional[str] = INPUT_FILE,
    start_func: str = START_FUNC,
    stop_func: str = STOP_FUNC,
    regex: str = REGEX,
    iregex: str = IREGEX,
    dry_run: bool = DRY_RUN,
    verbose: bool = VERBOSE,
):
    """Print the hooks that would be inserted for each function of a listing."""
    options = SelectionOptions(
        input_file=input_file,
        start_func=start_func,
        stop_func=stop_func,
        regex=regex,
        iregex=iregex,
        dry_run=dry_run,
    )
    cfg, reporter = _load(options, verbose)
    try:
        records = _read_listing(listing)
    except OSError as e:
        raise typer.BadParameter(str(e), param_hint="LISTING") from e

    instrument_pass = InstrumentationPass(
        Selector(cfg, reporter=reporter), options, instrumenter=EchoInstrumenter()
    )
    plans = instrument_pass.apply(records)
    typer.echo(json.dumps({
        "dry_run": options.dry_run,
        "plans": [
            {"function": p.function_name, "start": p.start_func, "stop": p.stop_func}
            for p in plans
        ],
        "stats": instrument_pass.get_stats(),
    }, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
