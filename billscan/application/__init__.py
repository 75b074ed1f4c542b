"""Application workflows composing the parser core with runtime services."""
