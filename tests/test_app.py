"""Tests for the application entry points."""

import importlib

from fastapi import FastAPI

from anthroq.__main__ import parse_args
from anthroq.config_loader import ProxySettings
from anthroq.core.orchestrator import MessagesOrchestrator


def test_module_level_app_uses_config_file(monkeypatch):
    monkeypatch.delenv("ANTHROQ_CONFIG", raising=False)
    monkeypatch.delenv("ANTHROQ_HOST", raising=False)
    monkeypatch.delenv("ANTHROQ_PORT", raising=False)

    main = importlib.reload(importlib.import_module("anthroq.main"))

    assert isinstance(main.app, FastAPI)
    settings = main.app.state.settings
    assert isinstance(settings, ProxySettings)
    assert settings.downstream_url == "https://api.groq.com/openai/v1/chat/completions"
    assert settings.max_output_tokens == 16384
    assert isinstance(main.app.state.orchestrator, MessagesOrchestrator)


def test_routes_registered():
    from anthroq.app import create_app

    app = create_app(ProxySettings())
    paths = {(route.path, method) for route in app.routes for method in getattr(route, "methods", ())}

    assert ("/", "GET") in paths
    assert ("/v1/messages", "POST") in paths


def test_cli_arguments():
    args = parse_args(["--config", "custom.yaml", "--port", "9000", "--log-level", "debug"])

    assert args.config == "custom.yaml"
    assert args.port == 9000
    assert args.host is None
    assert args.log_level == "debug"
