from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator, validators

__all__ = ["ResponseShadowValidator", "SchemaRegistry"]

LOGGER = logging.getLogger(__name__)

_MODULE_ROOT = Path(__file__).resolve().parent.parent


class SchemaRegistry:
    """Load and cache JSON schema validators for the response envelope."""

    _DEFAULT_SCHEMA_DIR = _MODULE_ROOT / "schemas"

    def __init__(self, *, schema_dir: Path | None = None) -> None:
        self._schema_dir = Path(schema_dir or self._DEFAULT_SCHEMA_DIR)
        self._cache: dict[Path, Draft202012Validator] = {}

    def load_response(self) -> Draft202012Validator:
        return self._load_validator(self._schema_dir / "response.schema.json")

    def _load_validator(self, path: Path) -> Draft202012Validator:
        if path in self._cache:
            return self._cache[path]
        schema = self._read_schema(path)
        validator_cls = validators.validator_for(schema)
        validator_cls.check_schema(schema)
        validator = validator_cls(schema)
        self._cache[path] = validator
        return validator

    def _read_schema(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Schema file not found: {path}")
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)


class ResponseShadowValidator:
    """Check outgoing responses against the schema and log, never block."""

    def __init__(self, registry: SchemaRegistry | None = None) -> None:
        self._validator = (registry or SchemaRegistry()).load_response()

    def check(self, payload: Mapping[str, Any]) -> list[str]:
        problems = [
            f"{'/'.join(str(part) for part in error.absolute_path) or '<root>'}: {error.message}"
            for error in self._validator.iter_errors(dict(payload))
        ]
        if problems:
            LOGGER.warning(
                "Response %r failed schema validation: %s",
                payload.get("id"),
                "; ".join(problems),
            )
        return problems
