# Copyright 2026 The lenra-check Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# LENRA CHECK - COMMAND LINE
# -----------------------------------------------------------------------------
#   lenra-check template [--strict] [--ignore PATTERN ...] [CHECKER ...]
#   lenra-check app      [--strict] [--ignore PATTERN ...] [CHECKER ...]
#
# Exit status: 0 passed, 1 check failed, 2 could not check.
# -----------------------------------------------------------------------------

import argparse
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from lenra_check import __version__
from lenra_check.config import ConfigError, load_config
from lenra_check.core.app_checker import AppChecker
from lenra_check.core.checker import CheckReport, run_checkers
from lenra_check.core.reporting import EXIT_FATAL, EXIT_OK, exit_code, render_report
from lenra_check.core.template import TemplateChecker
from lenra_check.domain.models import ManifestError
from lenra_check.infra.app_client import AppCallError, AppClient
from lenra_check.infra.docker_client import (
    APP_SERVICE_NAME,
    DockerProvider,
    DockerProviderError,
    ServiceNotExposedError,
)
from lenra_check.infra.schema import SchemaError

console = Console()

TEMPLATE_COMMAND = "template"
APP_COMMAND = "app"


def _add_check_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="The strict mode also fails with warning rules.",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="A rule to ignore: checker, checker:rule, or a prefix ending with '*'. Repeatable.",
    )
    parser.add_argument(
        "--require-service",
        action="store_true",
        help=f"Fail early unless the '{APP_SERVICE_NAME}' compose service publishes a port.",
    )
    parser.add_argument(
        "rules",
        nargs="*",
        metavar="CHECKER",
        help="Only run these checkers.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lenra-check",
        description="Check a running Lenra app against its expected structure.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="The configuration file.")
    parser.add_argument("--app-url", default=None, help="The app endpoint.")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds to wait for each app call.")

    commands = parser.add_subparsers(dest="command", required=True)
    _add_check_arguments(commands.add_parser(TEMPLATE_COMMAND, help="Checks the current project as a template"))
    _add_check_arguments(commands.add_parser(APP_COMMAND, help="Checks the current project as an app"))
    return parser


def _run(args: argparse.Namespace, client: AppClient, ignores: list[str]) -> CheckReport:
    if args.command == TEMPLATE_COMMAND:
        checker = TemplateChecker(client)
        console.print(f"[cyan][CHECK] Check with {checker!r}[/cyan]")
        return run_checkers(checker.check_list(), ignores, args.rules)

    app_checker = AppChecker(client)
    console.print(f"[cyan][CHECK] Check with {app_checker!r}[/cyan]")
    return app_checker.check(ignores, args.rules)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        console.print(f"[bold red][CONFIG] {escape(str(e))}[/bold red]")
        return EXIT_FATAL

    strict = args.strict or config.strict
    ignores = [*config.ignore, *args.ignore]
    client = AppClient(
        url=args.app_url or config.app_url,
        timeout=args.timeout if args.timeout is not None else config.timeout,
    )

    try:
        if args.require_service:
            DockerProvider().ensure_service_exposed(APP_SERVICE_NAME)
        report = _run(args, client, ignores)
    except (DockerProviderError, ServiceNotExposedError, AppCallError, ManifestError, SchemaError) as e:
        console.print(Panel(f"[bold red]{escape(str(e))}[/bold red]", title="CHECK ABORTED", border_style="red"))
        return EXIT_FATAL

    render_report(report, console)
    code = exit_code(report, strict)
    if code == EXIT_OK:
        console.print("[bold green][CHECK] Passed[/bold green]")
    else:
        console.print(f"[bold red][CHECK] Failed{' (strict mode)' if strict else ''}[/bold red]")
    return code
