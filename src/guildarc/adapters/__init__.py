"""Adapters that connect the profile core to files and renderers."""
