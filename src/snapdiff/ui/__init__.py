"""User interfaces for snapdiff."""
