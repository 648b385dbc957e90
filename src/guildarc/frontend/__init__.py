"""Textual frontend for guildarc."""
