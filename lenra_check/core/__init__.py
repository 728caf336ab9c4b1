# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The validation engine:
# - matching: structural diff of an actual value against an expected one
# - checker: rules, checkers, ignore patterns and severity reduction
# - rules: the rule book (match, manifest rules, result schema)
# - template / app_checker: the check lists
# - reporting: rendering and exit status
# -----------------------------------------------------------------------------

from .app_checker import AppChecker, check_route
from .checker import (
    Checker,
    CheckerResult,
    CheckReport,
    Rule,
    ignore_rule,
    is_ignored,
    reduce_level,
    run_checkers,
)
from .matching import compare, type_name
from .reporting import exit_code, render_report
from .template import TemplateChecker

__all__ = [
    "AppChecker", "check_route",
    "Checker", "CheckerResult", "CheckReport", "Rule",
    "ignore_rule", "is_ignored", "reduce_level", "run_checkers",
    "compare", "type_name",
    "exit_code", "render_report",
    "TemplateChecker",
]
