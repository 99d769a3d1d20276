"""File-format and serialization helpers used at the CLI boundary."""
