"""Section assembly, exports and document operations."""
