# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the manifest models (the routes an app declares) and the outcome
# vocabulary shared by the matcher, the checkers and the reporter.
# -----------------------------------------------------------------------------

from .models import (
    CheckerLevel,
    JsonRoute,
    LenraRoute,
    Manifest,
    ManifestError,
    Mismatch,
    MismatchKind,
    OutcomeLevel,
    RootView,
    Route,
    RoutesDefinition,
    RuleOutcome,
    ViewComponent,
    parse_manifest,
)

__all__ = [
    "CheckerLevel",
    "JsonRoute",
    "LenraRoute",
    "Manifest",
    "ManifestError",
    "Mismatch",
    "MismatchKind",
    "OutcomeLevel",
    "RootView",
    "Route",
    "RoutesDefinition",
    "RuleOutcome",
    "ViewComponent",
    "parse_manifest",
]
