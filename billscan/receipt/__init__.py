"""Bill text parsing, categorization, and rendering."""
