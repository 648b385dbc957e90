"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT = "#5865F2"

# Offered by the emoji picker; any other glyph can be typed in.
COMMON_EMOJIS = (
    "💼", "🏠", "🎮", "💻", "📚", "🎵", "🎨", "⚙️",
    "🌐", "📁", "⭐", "❤️", "🔥", "✨", "🚀", "💡",
    "🎯", "📱", "🖥️", "🎬", "📷", "🎤", "🎧", "🎪",
    "🏢", "🏰", "🌙", "☀️", "🌈", "🍕", "☕", "🍺",
)
