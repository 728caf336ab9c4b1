# -----------------------------------------------------------------------------
# THE REPORTER
# -----------------------------------------------------------------------------
# Renders a CheckReport: every outcome of a checker, then its summary line
#   <checker>           : Ok | Warning | Error
# coloured green, yellow or red. Computes the exit status of the run.
# -----------------------------------------------------------------------------

from rich.console import Console
from rich.markup import escape

from lenra_check.core.checker import CheckerResult, CheckReport

EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_FATAL = 2

NAME_WIDTH = 20


def _summary_name(name: str) -> str:
    # pad before escaping so markup backslashes do not shift the column
    return escape(name.ljust(NAME_WIDTH))


def render_result(result: CheckerResult, console: Console) -> None:
    """Print the outcomes of one checker followed by its summary line."""
    if result.skipped:
        console.print(f"[dim]{_summary_name(result.name)}: Skipped[/dim]")
        return

    for outcome in result.outcomes:
        color = outcome.level.to_checker_level().color
        console.print(f"[{color}]    {escape(outcome.rule)}\n        {escape(outcome.message)}[/{color}]")

    level = result.level
    console.print(f"[bold {level.color}]{_summary_name(result.name)}: {level.label}[/bold {level.color}]")


def render_report(report: CheckReport, console: Console) -> None:
    """Print every checker result, in run order."""
    for result in report.results:
        render_result(result, console)


def exit_code(report: CheckReport, strict: bool = False) -> int:
    """0 when the run passes, 1 when any checker fails (warnings fail in strict mode)."""
    return EXIT_CHECK_FAILED if report.failed(strict) else EXIT_OK
