"""GUI-agnostic document-tree editing core."""
