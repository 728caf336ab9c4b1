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
# SCHEMA VALIDATOR - JSON SCHEMA (DRAFT-07)
# -----------------------------------------------------------------------------
# Responsibility: Compile a JSON Schema once and list the violations of a
# candidate value. The bundled schemas live in lenra_check/schemas/.
# -----------------------------------------------------------------------------

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import Draft7Validator

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"
MANIFEST_SCHEMA = "manifest"
VIEW_RESULT_SCHEMA = "view_result"


class SchemaError(Exception):
    """Raised when a schema file cannot be read or is not a valid schema."""

    pass


@dataclass(frozen=True)
class SchemaViolation:
    """One schema violation: where it is (dotted path) and what is wrong."""

    path: str
    message: str


class SchemaValidator:
    """A compiled draft-07 schema."""

    def __init__(self, schema: dict[str, Any], name: str = "custom") -> None:
        try:
            Draft7Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise SchemaError(f"Invalid schema '{name}': {e.message}") from e
        self._validator = Draft7Validator(schema)
        self.name = name

    @classmethod
    def from_file(cls, path: Path) -> "SchemaValidator":
        """
        Load a schema from a JSON file.

        Raises:
            SchemaError: If the file is missing, not JSON, or not a schema.
        """
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SchemaError(f"Could not load schema {path}: {e}") from e
        return cls(schema, name=path.stem)

    @classmethod
    def bundled(cls, name: str) -> "SchemaValidator":
        """Load one of the schemas shipped with the package (`manifest`, `view_result`)."""
        return cls.from_file(SCHEMAS_DIR / f"{name}.json")

    def validate(self, value: Any) -> list[SchemaViolation]:
        """Return the violations of `value`, ordered by location. Empty when valid."""
        errors = sorted(self._validator.iter_errors(value), key=lambda e: list(map(str, e.absolute_path)))
        return [
            SchemaViolation(".".join(str(part) for part in error.absolute_path), error.message)
            for error in errors
        ]
