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
# THE APP CHECKER - ROUTES AGAINST THE VIEW RESULT SCHEMA
# -----------------------------------------------------------------------------
# Responsibility: Check any app from its own manifest.
#
# Flow:
# 1. Fetch the manifest and validate it against the manifest schema
# 2. Parse it into routes (a manifest matching no shape aborts the run)
# 3. One `route:<path>` checker per route: call the view with empty data and
#    the route props, then validate the result against the view result schema
# -----------------------------------------------------------------------------

from collections.abc import Sequence
from functools import partial
from typing import Any

from rich.console import Console

from lenra_check.core.checker import RULE_SEPARATOR, Checker, CheckReport, reduce_level, run_checkers
from lenra_check.core.rules import result_schema_rule
from lenra_check.domain.models import CheckerLevel, Manifest, Route, parse_manifest
from lenra_check.infra.app_client import AppClient
from lenra_check.infra.schema import MANIFEST_SCHEMA, VIEW_RESULT_SCHEMA, SchemaValidator

console = Console()

ROUTE = "route"


def route_request(route: Route) -> dict[str, Any]:
    """The view request of a route: its view, no data and its props."""
    return {"view": route.view(), "data": [], "props": route.props()}


def route_checker(route: Route, client: AppClient, validator: SchemaValidator) -> Checker:
    """Build the checker of a single route."""
    return Checker(
        name=f"{ROUTE}{RULE_SEPARATOR}{route.path()}",
        action=partial(client.call, route_request(route)),
        rules=(result_schema_rule(validator),),
    )


def check_route(route: Route, client: AppClient, validator: SchemaValidator) -> CheckerLevel:
    """
    Check one route and reduce the result to a single level.

    Every schema violation is logged. An unreachable app is an Error.
    """
    outcomes = route_checker(route, client, validator).check()
    for outcome in outcomes:
        console.print(f"[yellow][SCHEMA] {route.path()} -> {outcome.rule}: {outcome.message}[/yellow]")
    return reduce_level(outcomes)


class AppChecker:
    """
    Check list built from the manifest of the running app.

    Args:
        client: The client to call the app with.
        manifest_validator: Manifest schema. The bundled one if None.
        view_validator: View result schema. The bundled one if None.
    """

    def __init__(
        self,
        client: AppClient,
        manifest_validator: SchemaValidator | None = None,
        view_validator: SchemaValidator | None = None,
    ) -> None:
        self._client = client
        self._manifest_validator = manifest_validator or SchemaValidator.bundled(MANIFEST_SCHEMA)
        self._view_validator = view_validator or SchemaValidator.bundled(VIEW_RESULT_SCHEMA)

    def __repr__(self) -> str:
        return f"AppChecker(url={self._client.url!r})"

    def load_manifest(self) -> Manifest:
        """
        Fetch and parse the manifest.

        Schema violations are only logged: parsing decides whether the run
        can go on.

        Raises:
            AppCallError: If the manifest cannot be fetched.
            ManifestError: If the manifest matches no known shape.
        """
        document = self._client.get_manifest()
        for violation in self._manifest_validator.validate(document):
            location = violation.path or "<root>"
            console.print(f"[yellow][SCHEMA] manifest {location}: {violation.message}[/yellow]")
        manifest = parse_manifest(document)
        console.print(f"[green][MANIFEST] {len(manifest.routes())} route(s) declared[/green]")
        return manifest

    def check_list(self, manifest: Manifest) -> list[Checker]:
        """One checker per route, in declaration order."""
        return [route_checker(route, self._client, self._view_validator) for route in manifest.routes()]

    def check_route(self, route: Route) -> CheckerLevel:
        return check_route(route, self._client, self._view_validator)

    def check(self, ignores: Sequence[str] = (), rules: Sequence[str] = ()) -> CheckReport:
        """Load the manifest, then run every route checker."""
        manifest = self.load_manifest()
        return run_checkers(self.check_list(manifest), ignores, rules)
