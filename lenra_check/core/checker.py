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
# THE CHECKER FRAMEWORK - RULES, IGNORES AND SEVERITY
# -----------------------------------------------------------------------------
# Responsibility: Run named checkers. A checker fetches its subject with an
# action (usually a call to the app) and feeds it to its rules. Rules are pure
# functions: subject in, outcomes out.
#
# Ignore patterns disable parts of a run by qualified name:
#   manifest                  the whole `manifest` checker
#   manifest:rootWidget       one rule of it
#   view:*  /  view*          every checker or rule under the `view` prefix
#
# A failing action or rule never aborts the run: it becomes one Error outcome.
# -----------------------------------------------------------------------------

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console

from lenra_check.domain.models import CheckerLevel, RuleOutcome

console = Console()

RULE_SEPARATOR = ":"
WILDCARD = "*"
UNEXPECTED_ERROR_RULE = "unexpectedError"


def ignore_rule(parts: Iterable[str], ignores: Sequence[str]) -> bool:
    """
    Check whether a qualified name built from `parts` is suppressed.

    The name is built one part at a time. At each prefix the bare prefix,
    `prefix*` and `prefix:*` are looked up in the ignore list.
    """
    if not ignores:
        return False
    prefix = ""
    for part in parts:
        prefix = f"{prefix}{RULE_SEPARATOR}{part}" if prefix else part
        if prefix in ignores or f"{prefix}{WILDCARD}" in ignores:
            return True
        if f"{prefix}{RULE_SEPARATOR}{WILDCARD}" in ignores:
            return True
    return False


def is_ignored(qualified_name: str, ignores: Sequence[str]) -> bool:
    """Check whether a `checker:rule:...` name is suppressed."""
    return ignore_rule(qualified_name.split(RULE_SEPARATOR), ignores)


def reduce_level(outcomes: Iterable[RuleOutcome]) -> CheckerLevel:
    """Reduce outcomes to the most severe level, OK when there are none."""
    levels = sorted((outcome.level.to_checker_level() for outcome in outcomes), reverse=True)
    return levels[0] if levels else CheckerLevel.OK


@dataclass(frozen=True)
class Rule:
    """
    A named pure check over a subject value.

    `check` must not perform I/O: everything it needs is in the subject or was
    bound when the rule was built.
    """

    name: str
    description: str
    check: Callable[[Any], list[RuleOutcome]]
    examples: tuple[str, ...] = ()

    def __call__(self, subject: Any) -> list[RuleOutcome]:
        return list(self.check(subject))


@dataclass(frozen=True)
class Checker:
    """A named subject fetcher with the rules to run on its subject."""

    name: str
    action: Callable[[], Any]
    rules: tuple[Rule, ...] = ()

    def check(self, ignores: Sequence[str] = ()) -> list[RuleOutcome]:
        """
        Run the checker.

        Args:
            ignores: Ignore patterns for this run.

        Returns:
            The outcomes of every non-ignored rule, in rule order, each under
            its `checker:rule` qualified name. Empty if the checker is ignored.
        """
        if is_ignored(self.name, ignores):
            console.print(f"[dim][CHECKER] Checker '{self.name}' ignored[/dim]")
            return []

        try:
            subject = self.action()
        except Exception as e:
            return [
                RuleOutcome.error(
                    self._qualify(UNEXPECTED_ERROR_RULE),
                    f"Error loading {self.name} checker data: {e}",
                )
            ]

        outcomes: list[RuleOutcome] = []
        for rule in self.rules:
            rule_name = self._qualify(rule.name)
            if is_ignored(rule_name, ignores):
                console.print(f"[dim][CHECKER] Rule '{rule.name}' ignored for checker '{self.name}'[/dim]")
                continue
            try:
                rule_outcomes = rule(subject)
            except Exception as e:
                outcomes.append(
                    RuleOutcome.error(
                        f"{rule_name}{RULE_SEPARATOR}{UNEXPECTED_ERROR_RULE}",
                        f"Error running the {rule.name} rule of {self.name} checker: {e}",
                    )
                )
                continue
            for outcome in rule_outcomes:
                qualified = RuleOutcome(self._qualify(outcome.rule), outcome.message, outcome.level)
                # sub-rules (e.g. match:additionalProperty:path) can be ignored too
                if not is_ignored(qualified.rule, ignores):
                    outcomes.append(qualified)
        return outcomes

    def _qualify(self, rule: str) -> str:
        return f"{self.name}{RULE_SEPARATOR}{rule}"


@dataclass(frozen=True)
class CheckerResult:
    """The outcome of one checker in a run."""

    name: str
    outcomes: tuple[RuleOutcome, ...] = ()
    skipped: bool = False

    @property
    def level(self) -> CheckerLevel:
        return reduce_level(self.outcomes)


@dataclass
class CheckReport:
    """The structured result of a run: one CheckerResult per checker, in order."""

    results: list[CheckerResult] = field(default_factory=list)

    @property
    def level(self) -> CheckerLevel:
        return max((r.level for r in self.results), default=CheckerLevel.OK)

    def failed(self, strict: bool = False) -> bool:
        """A run fails on any Error, and on any Warning in strict mode."""
        threshold = CheckerLevel.WARNING if strict else CheckerLevel.ERROR
        return self.level >= threshold


def run_checkers(
    checkers: Iterable[Checker],
    ignores: Sequence[str] = (),
    rules: Sequence[str] = (),
) -> CheckReport:
    """
    Run checkers in registration order.

    Args:
        checkers: The checkers to run.
        ignores: Ignore patterns.
        rules: If not empty, only the checkers with these names run.

    Returns:
        A CheckReport. Ignored checkers are kept and marked skipped,
        checkers left out by `rules` are not listed.
    """
    report = CheckReport()
    for checker in checkers:
        if rules and checker.name not in rules:
            continue
        if is_ignored(checker.name, ignores):
            report.results.append(CheckerResult(checker.name, skipped=True))
            continue
        console.print(f"[cyan][CHECKER] Running {checker.name}[/cyan]")
        report.results.append(CheckerResult(checker.name, tuple(checker.check(ignores))))
    return report
