"""Tests for output formatters."""

from __future__ import annotations

import json

import pytest
import yaml

from smart_todo.utils.ui.formatters import (
    format_error,
    format_output,
    format_success,
    format_timestamp,
    short_id,
)

PROJECTS = {
    "projects": [
        {
            "id": "11111111-aaaa",
            "name": "Website",
            "description": "Marketing site",
            "archived": False,
            "pending_count": 2,
            "completed_count": 1,
        },
        {
            "id": "22222222-bbbb",
            "name": "Old stuff",
            "description": "",
            "archived": True,
            "archived_at": "2024-01-01T00:00:00+00:00",
        },
    ]
}

TODOS = {
    "title": "Website",
    "todos": [
        {"id": "t1", "project_id": "p1", "text": "Fix login bug", "completed": False, "priority": "high", "source": "ai"},
        {"id": "t2", "project_id": "p1", "text": "Write docs", "completed": True, "priority": "low", "source": "manual"},
    ],
}


class TestStructuredFormats:
    def test_json(self, capsys):
        format_output(PROJECTS, "json")
        assert json.loads(capsys.readouterr().out) == PROJECTS

    def test_yaml(self, capsys):
        format_output(TODOS, "yaml")
        assert yaml.safe_load(capsys.readouterr().out) == TODOS

    def test_table_lists_rows(self, capsys):
        format_output(PROJECTS, "table")
        out = capsys.readouterr().out
        assert "Website" in out
        assert "Old" in out


class TestPretty:
    def test_projects_grouped(self, capsys):
        format_output(PROJECTS, "pretty")
        out = capsys.readouterr().out
        assert "1 active, 1 archived" in out
        assert "2 pending, 1 completed" in out
        assert "11111111" in out

    def test_todos_numbered_pending_only(self, capsys):
        format_output(TODOS, "pretty")
        out = capsys.readouterr().out
        assert "1 pending" in out
        assert " 1. " in out
        assert "Fix login bug" in out
        assert "Write docs" in out
        assert " 2. " not in out

    def test_messages_show_suggestions(self, capsys):
        format_output(
            {
                "messages": [
                    {
                        "id": "m1",
                        "role": "assistant",
                        "content": "Try these",
                        "timestamp": "2024-01-01T00:00:00+00:00",
                        "suggested_todos": [
                            {"text": "Fix login bug", "project_id": "p1", "added": True},
                            {"text": "Add tests", "project_id": None, "added": False},
                        ],
                    }
                ]
            },
            "pretty",
        )
        out = capsys.readouterr().out
        assert "Assistant" in out
        assert "1. [✓] Fix login bug" in out
        assert "2. [ ] Add tests" in out

    def test_square_brackets_are_not_markup(self, capsys):
        format_output({"todos": [{"id": "t1", "project_id": "p", "text": "[bold]literal", "completed": False}]}, "pretty")
        assert "[bold]literal" in capsys.readouterr().out

    def test_empty(self, capsys):
        format_output({}, "pretty")
        assert "No data" in capsys.readouterr().out


def test_messages(capsys):
    format_success("saved")
    format_error("broken")
    out = capsys.readouterr().out
    assert "Success: saved" in out
    assert "Error: broken" in out


@pytest.mark.parametrize("value,expected", [(None, "-"), ("", "-"), ("not a date", "not a date")])
def test_format_timestamp_fallbacks(value, expected):
    assert format_timestamp(value) == expected


def test_short_id():
    assert short_id("1234567890") == "12345678"
