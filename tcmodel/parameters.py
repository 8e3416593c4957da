"""Typed build parameters and their flat, prefix-encoded storage form.

TeamCity keeps configuration parameters, system properties and environment
variables in a single key/value bag. The kind of a parameter is recoverable
only from its stored name:

    configuration  ``name``          -> ``name``
    system         ``name``          -> ``system.name``
    env            ``name``          -> ``env.name``

Decoding is a best-effort inverse. A configuration parameter literally named
``system.foo`` is stored exactly like a system parameter named ``foo`` and
decodes as the latter. That ambiguity is inherent to the storage format and
is kept as-is.

Usage:
    from tcmodel.parameters import ParameterCollection, ParameterKind

    params = ParameterCollection.empty()
    params.add_or_replace(ParameterKind.SYSTEM, "java.home", "/opt/jdk")
    body = params.to_json()
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import ValidationError

from tcmodel.errors import InvalidArgumentError
from tcmodel.schemas.teamcity import Properties, Property


class ParameterKind(str, Enum):
    """Semantic category of a parameter, selecting its stored-name prefix."""

    CONFIGURATION = "configuration"
    SYSTEM = "system"
    ENVIRONMENT_VARIABLE = "env"

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]


_PREFIXES: dict[ParameterKind, str] = {
    ParameterKind.CONFIGURATION: "",
    ParameterKind.SYSTEM: "system.",
    ParameterKind.ENVIRONMENT_VARIABLE: "env.",
}

# Checked in this order on decode; anything else is a configuration parameter.
_DECODE_ORDER = (ParameterKind.SYSTEM, ParameterKind.ENVIRONMENT_VARIABLE)


def _coerce_kind(kind: ParameterKind | str) -> ParameterKind:
    try:
        return ParameterKind(kind)
    except ValueError as exc:
        raise InvalidArgumentError(f"Unknown parameter kind '{kind}'") from exc


def encode_name(kind: ParameterKind | str, name: str) -> str:
    """Return the stored name for a parameter of ``kind`` called ``name``."""
    return _coerce_kind(kind).prefix + name


def decode_name(stored_name: str) -> tuple[ParameterKind, str]:
    """Split a stored name into ``(kind, name)`` by prefix.

    Not a true inverse of ``encode_name``; see the module docstring.
    """
    for kind in _DECODE_ORDER:
        if stored_name.startswith(kind.prefix):
            return kind, stored_name[len(kind.prefix):]
    return ParameterKind.CONFIGURATION, stored_name


@dataclass(frozen=True)
class Parameter:
    """A build parameter.

    ``name`` is the user-facing, unprefixed name and must not be empty.
    ``inherited`` is informational (set by the server for values coming
    from a parent project) and does not take part in equality.
    """

    kind: ParameterKind
    name: str
    value: str = ""
    inherited: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", _coerce_kind(self.kind))
        if not self.name:
            raise InvalidArgumentError("Parameter name must not be empty")

    @property
    def stored_name(self) -> str:
        return encode_name(self.kind, self.name)

    def encode(self) -> tuple[str, str]:
        """Return the ``(stored_name, value)`` pair."""
        return self.stored_name, self.value

    @classmethod
    def decode(cls, stored_name: str, value: str, inherited: bool = False) -> Parameter:
        """Build a parameter from its stored form, inferring the kind by prefix.

        Raises:
            InvalidArgumentError: If nothing is left of the name once the
                prefix is stripped.
        """
        kind, name = decode_name(stored_name)
        return cls(kind=kind, name=name, value=value, inherited=inherited)

    def to_property(self) -> Property:
        """Convert to the wire property used inside a collection."""
        return Property(
            name=self.stored_name,
            value=self.value,
            inherited=True if self.inherited else None,
        )

    @classmethod
    def from_property(cls, prop: Property) -> Parameter:
        return cls.decode(prop.name, prop.value, inherited=bool(prop.inherited))

    def to_json(self) -> str:
        """Serialize as ``{"name": <stored name>, "value": ...}``."""
        return self.to_property().model_dump_json(exclude_none=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> Parameter:
        try:
            prop = Property.model_validate_json(data)
        except ValidationError as exc:
            raise InvalidArgumentError(f"Malformed parameter payload: {exc}") from exc
        return cls.from_property(prop)


class ParameterCollection:
    """Ordered parameters, unique by stored name.

    Adding a parameter whose stored name is already present replaces that
    entry in its original position; otherwise the parameter is appended.
    """

    def __init__(self, parameters: Iterable[Parameter] = ()) -> None:
        self._items: dict[str, Parameter] = {}
        for parameter in parameters:
            self.add_or_replace_parameter(parameter)

    @classmethod
    def empty(cls) -> ParameterCollection:
        return cls()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._items.values())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Parameter):
            return item.stored_name in self._items
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterCollection):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    def __repr__(self) -> str:
        return f"ParameterCollection({list(self._items.values())!r})"

    @property
    def count(self) -> int:
        return len(self._items)

    def add_or_replace(self, kind: ParameterKind | str, name: str, value: str) -> None:
        """Insert a parameter, replacing any entry with the same stored name."""
        self.add_or_replace_parameter(Parameter(kind=kind, name=name, value=value))

    def add_or_replace_parameter(self, parameter: Parameter) -> None:
        # dict assignment keeps the position of an existing key
        self._items[parameter.stored_name] = parameter

    def get(self, kind: ParameterKind | str, name: str) -> Parameter | None:
        return self._items.get(encode_name(kind, name))

    def remove(self, kind: ParameterKind | str, name: str) -> None:
        """Remove a parameter if present."""
        self._items.pop(encode_name(kind, name), None)

    def concat(self, other: Iterable[Parameter]) -> ParameterCollection:
        """Return a new collection with ``other`` layered over this one."""
        merged = ParameterCollection(self)
        for parameter in other:
            merged.add_or_replace_parameter(parameter)
        return merged

    def non_inherited(self) -> ParameterCollection:
        """Return a new collection without server-inherited parameters."""
        return ParameterCollection(p for p in self if not p.inherited)

    def to_properties(self) -> Properties:
        props = [p.to_property() for p in self._items.values()]
        return Properties(count=len(props), property=props)

    def serialize(self) -> dict[str, Any]:
        """Return the ``{"count": N, "property": [...]}`` wire form."""
        return self.to_properties().model_dump(exclude_none=True)

    def to_json(self) -> str:
        return self.to_properties().model_dump_json(exclude_none=True)

    @classmethod
    def deserialize(cls, data: bytes | str | Mapping[str, Any]) -> ParameterCollection:
        """Rebuild a collection from its wire form.

        Each property is decoded by prefix. The payload's ``count`` is not
        consulted.

        Raises:
            InvalidArgumentError: If the payload is not a valid property bag
                or a property decodes to an empty name.
        """
        try:
            if isinstance(data, Mapping):
                props = Properties.model_validate(data)
            else:
                props = Properties.model_validate_json(data)
        except ValidationError as exc:
            raise InvalidArgumentError(f"Malformed parameter collection: {exc}") from exc
        return cls(Parameter.from_property(prop) for prop in props.property)
