from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from plugin_kit import OPERATION_FINISHED_SUCCESSFULLY_MESSAGE, bootstrap
from plugin_kit.configuration import PluginConfiguration
from plugin_kit.contracts import AutocompleteContext, InvocationContext
from plugin_kit.errors import InvalidNumberError, UnknownMethodError

CONFIG: dict[str, Any] = {
    "name": "bootstrap-sample",
    "methods": [
        {
            "name": "greet",
            "params": [
                {"name": "who", "type": "string", "required": True},
                {"name": "times", "type": "int", "default": 1},
            ],
        },
        {"name": "noop", "params": []},
    ],
    "auth": {"params": [{"name": "token", "type": "vault"}]},
}


def _action(method_name: str, **params: Any) -> dict[str, Any]:
    return {"method": {"name": method_name}, "params": params}


def test_wrapped_method_receives_resolved_params_and_context() -> None:
    calls: list[tuple[dict[str, Any], InvocationContext]] = []

    def greet(params: dict[str, Any], context: InvocationContext) -> dict[str, Any]:
        calls.append((params, context))
        return {"greeting": f"hello {params['who']}" * params["times"]}

    plugin = bootstrap({"greet": greet}, configuration=PluginConfiguration.from_mapping(CONFIG))
    action = _action("greet", who=" world ", times="2")

    result = plugin["greet"](action, {"token": "secret"})

    assert result == {"greeting": "hello worldhello world"}
    params, context = calls[0]
    assert params == {"who": "world", "times": 2, "token": "secret"}
    assert context.action is action
    assert context.method_name == "greet"
    assert context.settings == {"token": "secret"}


@pytest.mark.parametrize("returned", [None, "", {}, []])
def test_empty_results_become_success_message(returned: Any) -> None:
    plugin = bootstrap(
        {"noop": lambda params, context: returned},
        configuration=PluginConfiguration.from_mapping(CONFIG),
    )

    assert plugin["noop"](_action("noop")) == OPERATION_FINISHED_SUCCESSFULLY_MESSAGE


@pytest.mark.parametrize("returned", [0, False, "done"])
def test_non_empty_results_are_returned_unchanged(returned: Any) -> None:
    plugin = bootstrap(
        {"noop": lambda params, context: returned},
        configuration=PluginConfiguration.from_mapping(CONFIG),
    )

    assert plugin["noop"](_action("noop"), {}) == returned


def test_wrapped_method_keeps_name_and_doc() -> None:
    def noop(params, context):
        """Does nothing."""

    plugin = bootstrap({"noop": noop}, configuration=PluginConfiguration.from_mapping(CONFIG))

    assert plugin["noop"].__name__ == "noop"
    assert plugin["noop"].__doc__ == "Does nothing."


def test_method_missing_from_configuration_fails_before_invocation() -> None:
    called = []
    plugin = bootstrap(
        {"unknown": lambda params, context: called.append(params)},
        configuration=PluginConfiguration.from_mapping(CONFIG),
    )

    with pytest.raises(UnknownMethodError):
        plugin["unknown"](_action("unknown"))
    assert called == []


def test_resolution_errors_propagate_before_invocation() -> None:
    called = []
    plugin = bootstrap(
        {"greet": lambda params, context: called.append(params)},
        configuration=PluginConfiguration.from_mapping(CONFIG),
    )

    with pytest.raises(InvalidNumberError):
        plugin["greet"](_action("greet", who="x", times="lots"))
    assert called == []


def test_method_exceptions_are_logged_and_reraised(caplog) -> None:
    def explode(params, context):
        raise RuntimeError("boom")

    plugin = bootstrap({"noop": explode}, configuration=PluginConfiguration.from_mapping(CONFIG))

    with caplog.at_level("WARNING", logger="plugin_kit.bootstrap"):
        with pytest.raises(RuntimeError, match="boom"):
            plugin["noop"](_action("noop"))
    assert "Plugin method noop failed" in caplog.text


def test_names_shared_by_methods_and_autocomplete_are_rejected() -> None:
    with pytest.raises(ValueError, match=r"\['greet'\]"):
        bootstrap(
            {"greet": lambda params, context: None},
            {"greet": lambda query, params, context: []},
            configuration=PluginConfiguration.from_mapping(CONFIG),
        )


def test_autocomplete_wrapper_maps_params_and_fills_from_settings() -> None:
    received: list[tuple[str, dict[str, Any], AutocompleteContext]] = []

    def list_items(query: str, params: dict[str, Any], context: AutocompleteContext) -> list:
        received.append((query, params, context))
        return [{"id": "a", "value": "A"}]

    plugin = bootstrap({}, {"listItems": list_items})
    plugin_settings = [
        {"name": "region", "type": "string", "value": "eu"},
        {"name": "limit", "type": "int", "value": "10"},
    ]
    action_params = [
        {"name": "region", "type": "string", "value": ""},
        {"name": "limit", "type": "int", "value": "5"},
        {"name": "item", "type": "autocomplete", "value": {"id": "x", "value": "X"}},
    ]

    result = plugin["listItems"]("al", plugin_settings, action_params)

    assert result == [{"id": "a", "value": "A"}]
    query, params, context = received[0]
    assert query == "al"
    assert params == {"region": "eu", "limit": 5, "item": "x"}
    assert context.plugin_settings is plugin_settings
    assert context.action_params is action_params


def test_autocomplete_wrappers_do_not_need_configuration(monkeypatch) -> None:
    monkeypatch.delenv("PLUGIN_KIT_CONFIG", raising=False)
    plugin = bootstrap({}, {"listItems": lambda query, params, context: [query]})

    assert plugin["listItems"]("q", [], []) == ["q"]


def test_configuration_is_discovered_lazily(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("PLUGIN_KIT_CONFIG", raising=False)
    plugin = bootstrap({"noop": lambda params, context: params})

    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(CONFIG), encoding="utf-8")
    monkeypatch.setenv("PLUGIN_KIT_CONFIG", str(config_path))

    assert plugin["noop"](_action("noop"), {"token": "t"}) == {"token": "t"}
