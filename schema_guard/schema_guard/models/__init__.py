"""Data model of the schema_guard engine: value types, traversal trails and the schema dialect."""
