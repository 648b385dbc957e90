"""guildarc: switchable server profiles for a chat sidebar."""

__version__ = "1.0.0"
