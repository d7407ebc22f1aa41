"""Tests for the command-line interface."""

import json
import logging

import pytest
import typer
from rich.console import Console
from typer.testing import CliRunner

from feedroute import __version__
from feedroute import cli
from feedroute.cli import app, parse_params
from feedroute.core.exceptions import FetchError
from feedroute.models.feed import NormalizedItem, RouteInfo
from feedroute.pipeline.assemble import assemble_feed
from feedroute.routes import BaseRoute, register_route, unregister_route

runner = CliRunner()


class StaticRoute(BaseRoute):
    key = "static-test"
    info = RouteInfo(path="/:name", name="Static", url="https://static.example.com", example="/static-test/a")

    async def collect(self, params):
        if params["name"] == "broken":
            raise FetchError("HTTP 500", url="https://static.example.com")
        item = NormalizedItem(title=f"Hello {params['name']}", link="https://static.example.com/1")
        return assemble_feed("Static", "https://static.example.com", items=[item])


@pytest.fixture
def static_route():
    register_route(StaticRoute)
    yield StaticRoute
    unregister_route(StaticRoute.key)
    logger = logging.getLogger("feedroute")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestCommands:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_routes_lists_builtins(self, monkeypatch):
        monkeypatch.setattr(cli, "console", Console(width=200))
        result = runner.invoke(app, ["routes"])

        assert result.exit_code == 0
        assert "zaixs" in result.output
        assert "/:schoolId" in result.output

    def test_run_rss(self, static_route):
        result = runner.invoke(app, ["run", "static-test", "--param", "name=world"])

        assert result.exit_code == 0
        assert "<rss" in result.output
        assert "Hello world" in result.output

    def test_run_json(self, static_route):
        result = runner.invoke(
            app, ["run", "static-test", "-p", "name=世界", "--format", "json", "--log-level", "WARNING"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["item"][0]["title"] == "Hello 世界"

    def test_run_failure_exits_nonzero(self, static_route):
        result = runner.invoke(app, ["run", "static-test", "-p", "name=broken"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_parameter(self, static_route):
        result = runner.invoke(app, ["run", "static-test"])

        assert result.exit_code == 1
        assert "name" in result.output

    def test_unknown_route(self, static_route):
        result = runner.invoke(app, ["run", "no-such-route"])

        assert result.exit_code == 1
        assert "Unknown route" in result.output


class TestParseParams:
    def test_pairs(self):
        assert parse_params(["fid=112", "a = b=c"]) == {"fid": "112", "a": "b=c"}

    def test_none(self):
        assert parse_params(None) == {}

    def test_invalid(self):
        with pytest.raises(typer.BadParameter):
            parse_params(["novalue"])
