# -----------------------------------------------------------------------------
# THE TEMPLATE CHECKER
# -----------------------------------------------------------------------------
# Checks that the current project still behaves like the Lenra app template:
# the manifest declares the `main` root view and the main, menu, home and
# counter views render the template's component trees.
# -----------------------------------------------------------------------------

from functools import partial
from typing import Any

from lenra_check.core.checker import RULE_SEPARATOR, Checker
from lenra_check.core.rules import manifest_rules, match_rule
from lenra_check.infra.app_client import AppClient

VIEW = "view"
MANIFEST_CHECKER = "manifest"
ROOT_VIEW = "main"

COUNTER_DATA = [
    {
        "_id": "ObjectId(my_counter_id)",
        "count": 2,
        "user": "my_user_id",
    }
]

EXPECTED_MAIN = {
    "type": "flex",
    "direction": "vertical",
    "scroll": True,
    "spacing": 4,
    "crossAxisAlignment": "center",
    "children": [
        {"type": "view", "name": "menu"},
        {"type": "view", "name": "home"},
    ],
}

EXPECTED_MENU = {
    "type": "container",
    "decoration": {
        "color": 0xFFFFFFFF,
        "boxShadow": {
            "blurRadius": 8,
            "color": 0x1A000000,
            "offset": {"dx": 0, "dy": 1},
        },
    },
    "padding": {"top": 16, "bottom": 16, "left": 32, "right": 32},
    "child": {
        "type": "flex",
        "fillParent": True,
        "mainAxisAlignment": "spaceBetween",
        "crossAxisAlignment": "center",
        "padding": {"right": 32},
        "children": [
            {
                "type": "container",
                "constraints": {
                    "minWidth": 32,
                    "minHeight": 32,
                    "maxWidth": 32,
                    "maxHeight": 32,
                },
                "child": {"type": "image", "src": "logo.png"},
            },
            {
                "type": "flexible",
                "child": {
                    "type": "container",
                    "child": {
                        "type": "text",
                        "value": "Hello World",
                        "textAlign": "center",
                        "style": {"fontWeight": "bold", "fontSize": 24},
                    },
                },
            },
        ],
    },
}

EXPECTED_HOME = {
    "type": "flex",
    "direction": "vertical",
    "spacing": 16,
    "mainAxisAlignment": "spaceEvenly",
    "crossAxisAlignment": "center",
    "children": [
        {
            "type": "view",
            "name": "counter",
            "coll": "counter",
            "query": {"user": "@me"},
            "props": {"text": "My personnal counter"},
        },
        {
            "type": "view",
            "name": "counter",
            "coll": "counter",
            "query": {"user": "global"},
            "props": {"text": "The common counter"},
        },
    ],
}

EXPECTED_COUNTER = {
    "type": "flex",
    "spacing": 16,
    "mainAxisAlignment": "spaceEvenly",
    "crossAxisAlignment": "center",
    "children": [
        {"type": "text", "value": "My counter text: 2"},
        {
            "type": "button",
            "text": "+",
            "onPressed": {
                "action": "increment",
                "props": {"id": "ObjectId(my_counter_id)"},
            },
        },
    ],
}


def view_checker_name(view: str) -> str:
    return f"{VIEW}{RULE_SEPARATOR}{view}"


class TemplateChecker:
    """
    The check list of the app template.

    Args:
        client: The client used by every checker action.
    """

    def __init__(self, client: AppClient) -> None:
        self._client = client

    def __repr__(self) -> str:
        return f"TemplateChecker(url={self._client.url!r})"

    def _view_checker(
        self,
        view: str,
        expected: Any,
        data: list[Any] | None = None,
        props: dict[str, Any] | None = None,
    ) -> Checker:
        return Checker(
            name=view_checker_name(view),
            action=partial(self._client.get_view, view, data, props),
            rules=(match_rule(expected),),
        )

    def check_list(self) -> list[Checker]:
        """The template checkers, in run order. Names are unique."""
        return [
            Checker(
                name=MANIFEST_CHECKER,
                action=self._client.get_manifest,
                rules=manifest_rules(ROOT_VIEW),
            ),
            self._view_checker("main", EXPECTED_MAIN),
            self._view_checker("menu", EXPECTED_MENU),
            self._view_checker("home", EXPECTED_HOME),
            self._view_checker(
                "counter",
                EXPECTED_COUNTER,
                data=COUNTER_DATA,
                props={"text": "My counter text"},
            ),
        ]
