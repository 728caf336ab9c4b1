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
# THE RULE BOOK
# -----------------------------------------------------------------------------
# Ready-made rules for checkers:
# - match: diff the subject against an expected template
# - additionalRootProperties / additionalManifestProperties / rootWidget:
#   the manifest rules
# - resultSchema: JSON Schema conformance of a view result
#
# Every rule is built once and is a pure function of its subject.
# -----------------------------------------------------------------------------

import json
from functools import partial
from typing import Any

from lenra_check.core.checker import RULE_SEPARATOR, Rule
from lenra_check.core.matching import compare, type_name
from lenra_check.domain.models import Mismatch, MismatchKind, RuleOutcome
from lenra_check.infra.schema import SchemaValidator

MATCH = "match"
ADDITIONAL_ROOT_PROPERTIES = "additionalRootProperties"
ADDITIONAL_MANIFEST_PROPERTIES = "additionalManifestProperties"
ROOT_WIDGET = "rootWidget"
RESULT_SCHEMA = "resultSchema"

MANIFEST_KEY = "manifest"
ROOT_KEYS = frozenset({MANIFEST_KEY})
MANIFEST_KEYS = frozenset({"rootView", "rootWidget", "lenraRoutes", "jsonRoutes"})
# `rootWidget` is the legacy name of `rootView`
ROOT_VIEW_KEYS = ("rootWidget", "rootView")


def _sub_rule(*parts: str) -> str:
    return RULE_SEPARATOR.join(part for part in parts if part)


def _dump(value: Any) -> str:
    return json.dumps(value, default=str)


# =============================================================================
# MATCH
# =============================================================================


def mismatch_outcome(mismatch: Mismatch) -> RuleOutcome:
    """Turn a matcher mismatch into a `match:<kind>:<path>` outcome."""
    rule = _sub_rule(MATCH, mismatch.kind.value, mismatch.path)
    path = mismatch.path or "<root>"

    if mismatch.kind is MismatchKind.NOT_SAME_TYPE:
        return RuleOutcome.error(
            rule,
            f"Not matching type for {path}: got {type_name(mismatch.actual)} "
            f"but expected {type_name(mismatch.expected)}",
        )
    if mismatch.kind is MismatchKind.NOT_SAME_VALUE:
        return RuleOutcome.error(
            rule,
            f"Not matching value for {path}: got {_dump(mismatch.actual)} "
            f"but expected {_dump(mismatch.expected)}",
        )
    if mismatch.kind is MismatchKind.ADDITIONAL_PROPERTY:
        return RuleOutcome.warning(rule, f"Additional property {path}")
    return RuleOutcome.error(rule, f"Missing property {path}")


def _check_match(subject: Any, expected: Any) -> list[RuleOutcome]:
    return [mismatch_outcome(mismatch) for mismatch in compare(subject, expected)]


def match_rule(expected: Any) -> Rule:
    """Build the rule diffing a subject against `expected`."""
    return Rule(
        name=MATCH,
        description="Checks that the data matches the expected one",
        check=partial(_check_match, expected=expected),
    )


# =============================================================================
# MANIFEST
# =============================================================================


def _check_additional_root_properties(subject: Any) -> list[RuleOutcome]:
    if not isinstance(subject, dict):
        return [RuleOutcome.error(ADDITIONAL_ROOT_PROPERTIES, "The response is not an object")]
    outcomes = []
    if MANIFEST_KEY not in subject:
        outcomes.append(RuleOutcome.error(ADDITIONAL_ROOT_PROPERTIES, "The manifest property was not found"))
    return outcomes + [
        RuleOutcome.warning(
            _sub_rule(ADDITIONAL_ROOT_PROPERTIES, str(key)),
            f"Additional root property {key}",
        )
        for key in subject
        if key not in ROOT_KEYS
    ]


def _manifest_of(subject: Any, rule: str) -> tuple[dict | None, list[RuleOutcome]]:
    if not isinstance(subject, dict):
        return None, [RuleOutcome.error(rule, "The response is not an object")]
    if MANIFEST_KEY not in subject:
        return None, [RuleOutcome.error(rule, "The manifest property was not found")]
    manifest = subject[MANIFEST_KEY]
    if not isinstance(manifest, dict):
        return None, [RuleOutcome.error(rule, "The manifest property is not an object")]
    return manifest, []


def _check_additional_manifest_properties(subject: Any) -> list[RuleOutcome]:
    manifest, errors = _manifest_of(subject, ADDITIONAL_MANIFEST_PROPERTIES)
    if manifest is None:
        return errors
    return [
        RuleOutcome.warning(
            _sub_rule(ADDITIONAL_MANIFEST_PROPERTIES, str(key)),
            f"Additional manifest property {key}",
        )
        for key in manifest
        if key not in MANIFEST_KEYS
    ]


def _check_root_widget(subject: Any, expected: str) -> list[RuleOutcome]:
    manifest, errors = _manifest_of(subject, ROOT_WIDGET)
    if manifest is None:
        return errors

    key = next((k for k in ROOT_VIEW_KEYS if k in manifest), None)
    if key is None:
        return [RuleOutcome.error(ROOT_WIDGET, "The manifest root widget was not found")]
    if manifest[key] != expected:
        return [
            RuleOutcome.error(
                ROOT_WIDGET,
                f"The manifest root widget is {_dump(manifest[key])} but expected {_dump(expected)}",
            )
        ]
    return []


def manifest_rules(root_view: str = "main") -> tuple[Rule, ...]:
    """The rules of the manifest checker, expecting `root_view` as the root widget."""
    return (
        Rule(
            name=ADDITIONAL_ROOT_PROPERTIES,
            description="Checks that the response only contains the manifest",
            check=_check_additional_root_properties,
            examples=('{"manifest": {...}, "extra": 1}',),
        ),
        Rule(
            name=ADDITIONAL_MANIFEST_PROPERTIES,
            description="Checks that the manifest only contains known properties",
            check=_check_additional_manifest_properties,
            examples=('{"manifest": {"rootView": "main", "theme": "dark"}}',),
        ),
        Rule(
            name=ROOT_WIDGET,
            description=f"Checks that the manifest root widget is '{root_view}'",
            check=partial(_check_root_widget, expected=root_view),
            examples=('{"manifest": {"rootWidget": "other"}}',),
        ),
    )


# =============================================================================
# SCHEMA
# =============================================================================


def _check_schema(subject: Any, validator: SchemaValidator) -> list[RuleOutcome]:
    return [
        RuleOutcome.error(_sub_rule(RESULT_SCHEMA, violation.path), violation.message)
        for violation in validator.validate(subject)
    ]


def result_schema_rule(validator: SchemaValidator) -> Rule:
    """Build the rule reporting every JSON Schema violation as an Error."""
    return Rule(
        name=RESULT_SCHEMA,
        description=f"Checks that the data follows the {validator.name} schema",
        check=partial(_check_schema, validator=validator),
    )
