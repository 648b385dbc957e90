"""Core domain package for guildarc.

Core contains the profile store, visibility resolution, and navigation logic
without any storage, host, or UI-specific code, keeping the rules portable.
"""
