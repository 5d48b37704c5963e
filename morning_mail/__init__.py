"""Morning Mail: sends one fixed email every day and exposes a tiny HTTP API."""

__version__ = "0.1.0"
