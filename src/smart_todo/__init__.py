"""smart-todo: local-first projects, todos and notes with assistant suggestions."""

__version__ = "0.3.0"
