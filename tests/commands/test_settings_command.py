"""Tests for settings commands."""

import asyncio
import json

import pytest
from typer.testing import CliRunner

from smart_todo.commands.settings import mask_api_key
from smart_todo.main import app
from smart_todo.models import Settings

runner = CliRunner()


def invoke(gateway, *args):
    return runner.invoke(app, ["settings", *args], obj=gateway)


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("", "(not set)"),
        ("short", "*****"),
        ("sk-ant-abcdefgh1234", "sk-...1234"),
    ],
)
def test_mask_api_key(key, expected):
    assert mask_api_key(key) == expected


def test_show_defaults(gateway):
    result = invoke(gateway, "show", "-o", "json")
    assert result.exit_code == 0
    assert json.loads(result.output) == {"api_key": "(not set)", "celebration_enabled": True}


def test_show_never_prints_full_key(gateway):
    asyncio.run(gateway.save_settings(Settings(api_key="sk-ant-secretsecret9876")))
    result = invoke(gateway, "show")
    assert result.exit_code == 0
    assert "secretsecret" not in result.output
    assert "9876" in result.output


def test_set_api_key(gateway):
    result = invoke(gateway, "set", "--api-key", " sk-ant-new ")
    assert result.exit_code == 0
    assert "Settings saved" in result.output
    assert asyncio.run(gateway.get_settings()).api_key == "sk-ant-new"


def test_set_keeps_other_fields(gateway):
    asyncio.run(gateway.save_settings(Settings(api_key="sk-ant-keep")))
    invoke(gateway, "set", "--no-celebration")
    settings = asyncio.run(gateway.get_settings())
    assert settings.api_key == "sk-ant-keep"
    assert settings.celebration_enabled is False


def test_set_nothing(gateway):
    result = invoke(gateway, "set")
    assert result.exit_code == 2
    assert "No settings specified" in result.output
    assert asyncio.run(gateway.get_settings()) is None
