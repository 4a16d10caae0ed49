"""Feature schema files: loading, validation and rendering."""

from featflags.schema.loader import load_schema, schema_to_text, validate_schema

__all__ = ["load_schema", "schema_to_text", "validate_schema"]
