"""JSON schema validation helpers for sidecar envelopes."""

from .schema_registry import ResponseShadowValidator, SchemaRegistry

__all__ = ["ResponseShadowValidator", "SchemaRegistry"]
