"""Command groups for the smart-todo CLI."""
