"""Shared CLI helpers."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..analysis import AnalysisEngine, Report
from ..config import AnalysisConfig, load_config
from ..exceptions import DebtscopeError
from ..logging_config import get_logger

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
) -> AnalysisConfig:
    """Build the analysis config from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    return load_config(config_file=config, **overrides)


def run_analysis(
    target: Path,
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
) -> Report:
    settings = resolve_config(config=config, workers=workers, verbose=verbose)
    return AnalysisEngine(settings).run(target)


@contextmanager
def cli_errors(verbose: bool = False) -> Iterator[None]:
    """Map exceptions raised inside a command onto exit codes."""
    try:
        yield
    except typer.Exit:
        raise
    except DebtscopeError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1)
