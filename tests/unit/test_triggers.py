"""Unit tests for trigger declaration normalisation."""

from __future__ import annotations

import pytest
import yaml

from workflow_merge_triggers.analysis.triggers import (
    EventConfig,
    ListTrigger,
    MappingTrigger,
    StringTrigger,
    find_trigger_declaration,
    normalize_patterns,
    normalize_trigger,
)


def test_bare_string_becomes_single_event_without_config() -> None:
    trigger = normalize_trigger("push")

    assert trigger == StringTrigger(event="push")
    assert list(trigger.events()) == [("push", None)]


def test_list_becomes_events_without_config() -> None:
    trigger = normalize_trigger(["push", "pull_request", 3])

    assert isinstance(trigger, ListTrigger)
    assert list(trigger.events()) == [("push", None), ("pull_request", None)]


def test_mapping_keeps_declaration_order_and_configs() -> None:
    trigger = normalize_trigger(
        {
            "workflow_dispatch": None,
            "pull_request": {"branches": "main", "branches-ignore": ["wip/*"]},
            "push": {"branches": ["main"], "paths": ["src/**"], "paths-ignore": "docs/**"},
        }
    )

    assert isinstance(trigger, MappingTrigger)
    assert list(trigger.events()) == [
        ("workflow_dispatch", None),
        ("pull_request", EventConfig(branches=("main",), branches_ignore=("wip/*",))),
        (
            "push",
            EventConfig(branches=("main",), paths=("src/**",), paths_ignore=("docs/**",)),
        ),
    ]


@pytest.mark.parametrize("value", [None, "", 42, True])
def test_unsupported_shapes_yield_no_trigger(value: object) -> None:
    assert normalize_trigger(value) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("", None),
        ("main", ("main",)),
        (["main", 1, "release/*"], ("main", "release/*")),
        ([], ()),
        ({"unexpected": "shape"}, ()),
        (5, ()),
    ],
)
def test_normalize_patterns(value: object, expected: tuple[str, ...] | None) -> None:
    assert normalize_patterns(value) == expected


def test_event_config_from_non_mapping_declares_no_filters() -> None:
    assert EventConfig.from_yaml(None) is None
    assert EventConfig.from_yaml("") is None
    assert EventConfig.from_yaml(["main"]) == EventConfig()
    assert EventConfig.from_yaml({}) == EventConfig()


def test_trigger_key_loaded_as_boolean_by_yaml_1_1() -> None:
    document = yaml.safe_load("on: push\n")

    assert True in document
    assert find_trigger_declaration(document) == "push"


def test_quoted_trigger_key_is_found() -> None:
    document = yaml.safe_load('"on": [push]\n')

    assert find_trigger_declaration(document) == ["push"]


def test_missing_trigger_key() -> None:
    assert find_trigger_declaration({"name": "CI", "jobs": {}}) is None
