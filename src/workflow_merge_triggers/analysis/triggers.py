"""Normalise the `on:` declaration of a workflow into explicit trigger types.

A workflow may declare its triggers in three shapes:

    on: push
    on: [push, pull_request]
    on:
      push:
        branches: [main]

Each shape is resolved once into a `StringTrigger`, `ListTrigger` or
`MappingTrigger`. All of them expose `events()`, which yields
`(event_name, EventConfig | None)` pairs in declaration order, so the
classifier never has to inspect raw YAML values.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

# PyYAML implements YAML 1.1, where a bare `on` key loads as boolean True.
_TRIGGER_KEYS: tuple[object, ...] = ("on", True)


def normalize_patterns(value: object) -> tuple[str, ...] | None:
    """Normalise a `branches`/`paths`-style field.

    Returns:
        None when the field is not declared (or null/empty), otherwise a tuple of patterns.
        Values that are neither a string nor a list become an empty tuple.
    """

    if value is None or value == "":
        return None
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(item for item in value if isinstance(item, str))
    return ()


@dataclass(frozen=True, slots=True)
class EventConfig:
    """Filters declared for a single event.

    Each field is None when the key is absent from the event configuration.
    `branches_ignore` is parsed for completeness; classification does not use it.
    """

    branches: tuple[str, ...] | None = None
    branches_ignore: tuple[str, ...] | None = None
    paths: tuple[str, ...] | None = None
    paths_ignore: tuple[str, ...] | None = None

    @staticmethod
    def from_yaml(value: object) -> EventConfig | None:
        """Build a config from the value under an event key.

        A null or empty-string value means "declared without configuration"
        and returns None.
        Non-mapping values count as a configuration that declares no filters.
        """

        if value is None or value == "":
            return None
        if not isinstance(value, Mapping):
            return EventConfig()
        return EventConfig(
            branches=normalize_patterns(value.get("branches")),
            branches_ignore=normalize_patterns(value.get("branches-ignore")),
            paths=normalize_patterns(value.get("paths")),
            paths_ignore=normalize_patterns(value.get("paths-ignore")),
        )


TriggerEventEntry = tuple[str, EventConfig | None]


@dataclass(frozen=True, slots=True)
class StringTrigger:
    """`on: <event>`"""

    event: str

    def events(self) -> Iterator[TriggerEventEntry]:
        yield self.event, None


@dataclass(frozen=True, slots=True)
class ListTrigger:
    """`on: [<event>, ...]`"""

    event_names: tuple[str, ...]

    def events(self) -> Iterator[TriggerEventEntry]:
        for name in self.event_names:
            yield name, None


@dataclass(frozen=True, slots=True)
class MappingTrigger:
    """`on: {<event>: <config or null>, ...}`"""

    entries: tuple[TriggerEventEntry, ...]

    def events(self) -> Iterator[TriggerEventEntry]:
        yield from self.entries


Trigger = StringTrigger | ListTrigger | MappingTrigger


def normalize_trigger(value: object) -> Trigger | None:
    """Resolve the raw `on:` value into a trigger variant.

    Returns None for shapes that declare no events (null, empty string, scalars).
    """

    if isinstance(value, str):
        return StringTrigger(event=value) if value else None
    if isinstance(value, list):
        return ListTrigger(event_names=tuple(v for v in value if isinstance(v, str)))
    if isinstance(value, Mapping):
        return MappingTrigger(
            entries=tuple((str(name), EventConfig.from_yaml(cfg)) for name, cfg in value.items())
        )
    return None


def find_trigger_declaration(document: Mapping[object, object]) -> object:
    """Return the raw `on:` value of a parsed workflow document, or None."""

    for key in _TRIGGER_KEYS:
        if key in document:
            return document[key]
    return None
