"""Tabs shown by the profile panel."""
