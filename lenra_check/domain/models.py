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
# DOMAIN MODELS - MANIFEST, ROUTES AND CHECK OUTCOMES
# -----------------------------------------------------------------------------
# The manifest models describe what an app exposes: either a single root view
# or a table of routes. They are built once per manifest fetch and are frozen.
#
# The outcome types (Mismatch, RuleOutcome, CheckerLevel) are the vocabulary
# shared by the matcher, the checkers and the reporter.
# -----------------------------------------------------------------------------

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ManifestError(Exception):
    """
    Raised when a manifest document matches none of the known shapes.

    Fatal for a check run: without a manifest there is nothing to check.
    """

    def __init__(self, message: str, document: Any = None) -> None:
        super().__init__(message)
        self.document = document


# =============================================================================
# ROUTES
# =============================================================================


class Route(ABC):
    """A declared mapping from a path to a view and its input props."""

    @abstractmethod
    def path(self) -> str: ...

    @abstractmethod
    def view(self) -> str: ...

    def props(self) -> dict[str, Any]:
        return {}


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RootView(_FrozenModel, Route):
    """Single root view declaration: `{"rootView": "main"}`, served at `/`."""

    root_view: str = Field(..., alias="rootView")

    def path(self) -> str:
        return "/"

    def view(self) -> str:
        return self.root_view


class ViewComponent(_FrozenModel):
    """The `view` part of a Lenra route: a view name and optional props."""

    name: str
    props: dict[str, Any] | None = None


class LenraRoute(_FrozenModel, Route):
    """A route rendered by a Lenra view, with optional props."""

    route_path: str = Field(..., alias="path")
    view_component: ViewComponent = Field(..., alias="view")

    def path(self) -> str:
        return self.route_path

    def view(self) -> str:
        return self.view_component.name

    def props(self) -> dict[str, Any]:
        if self.view_component.props is None:
            return {}
        return dict(self.view_component.props)


class JsonRoute(_FrozenModel, Route):
    """A route answered with the raw JSON of a view, referenced by name only."""

    route_path: str = Field(..., alias="path")
    view_name: str = Field(..., alias="view")

    def path(self) -> str:
        return self.route_path

    def view(self) -> str:
        return self.view_name


class RoutesDefinition(_FrozenModel):
    """A full routes table. Both lists are optional but one must be declared."""

    lenra_routes: list[LenraRoute] | None = Field(default=None, alias="lenraRoutes")
    json_routes: list[JsonRoute] | None = Field(default=None, alias="jsonRoutes")

    def routes(self) -> list[Route]:
        return [*(self.lenra_routes or []), *(self.json_routes or [])]


class Manifest(_FrozenModel):
    """The parsed `manifest` document of an app."""

    content: RootView | RoutesDefinition

    def routes(self) -> list[Route]:
        if isinstance(self.content, RootView):
            return [self.content]
        return self.content.routes()


def parse_manifest(document: Any) -> Manifest:
    """
    Build a Manifest from a fetched `{"manifest": {...}}` document.

    The variant is picked by sniffing the keys of the manifest object: a
    `rootView` key selects RootView, `lenraRoutes`/`jsonRoutes` select
    RoutesDefinition. There is no default variant.

    Raises:
        ManifestError: If the document matches no variant.
    """
    if not isinstance(document, dict):
        raise ManifestError("The manifest document is not an object", document)
    content = document.get("manifest")
    if not isinstance(content, dict):
        raise ManifestError("The manifest document has no 'manifest' object", document)

    try:
        if "rootView" in content:
            return Manifest(content=RootView.model_validate(content))
        if "lenraRoutes" in content or "jsonRoutes" in content:
            return Manifest(content=RoutesDefinition.model_validate(content))
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest: {e}", document) from e

    raise ManifestError(
        "The manifest matches neither a root view nor a routes definition", document
    )


# =============================================================================
# OUTCOMES
# =============================================================================


class MismatchKind(str, Enum):
    """The kinds of structural deviation the matcher reports."""

    NOT_SAME_TYPE = "sameType"
    NOT_SAME_VALUE = "sameValue"
    ADDITIONAL_PROPERTY = "additionalProperty"
    MISSING_PROPERTY = "missingProperty"


@dataclass(frozen=True)
class Mismatch:
    """One located deviation between an actual and an expected value."""

    path: str
    kind: MismatchKind
    actual: Any = None
    expected: Any = None


class CheckerLevel(IntEnum):
    """Ordered severity: OK < WARNING < ERROR."""

    OK = 0
    WARNING = 1
    ERROR = 2

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()


_LEVEL_COLORS = {
    CheckerLevel.OK: "green",
    CheckerLevel.WARNING: "yellow",
    CheckerLevel.ERROR: "red",
}


class OutcomeLevel(str, Enum):
    """Severity of a single rule outcome. Success produces no outcome at all."""

    WARNING = "warning"
    ERROR = "error"

    def to_checker_level(self) -> CheckerLevel:
        if self is OutcomeLevel.ERROR:
            return CheckerLevel.ERROR
        return CheckerLevel.WARNING


@dataclass(frozen=True)
class RuleOutcome:
    """A warning or error produced by a rule, under its qualified rule name."""

    rule: str
    message: str
    level: OutcomeLevel

    @classmethod
    def warning(cls, rule: str, message: str) -> "RuleOutcome":
        return cls(rule=rule, message=message, level=OutcomeLevel.WARNING)

    @classmethod
    def error(cls, rule: str, message: str) -> "RuleOutcome":
        return cls(rule=rule, message=message, level=OutcomeLevel.ERROR)
