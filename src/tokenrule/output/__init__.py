"""Reporters for drafts and committed rules."""
