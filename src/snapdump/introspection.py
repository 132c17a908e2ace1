"""Attribute discovery for composite values."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

__all__ = ["MISSING", "is_record", "type_attributes", "value_attributes"]

MISSING = object()


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _field_names(cls: type) -> list[str]:
    """Declared data members of a class: dataclass fields, named-tuple fields or slots."""
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls) if _is_public(f.name)]
    fields = getattr(cls, "_fields", None)
    if issubclass(cls, tuple) and isinstance(fields, tuple):
        return [name for name in fields if _is_public(name)]

    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if _is_public(name) and name not in names:
                names.append(name)
    return names


def _property_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if isinstance(member, property) and _is_public(name) and name not in names:
                names.append(name)
    return names


def type_attributes(cls: type) -> list[str]:
    """
    Attribute names that every instance of ``cls`` exposes.

    Fields come first, then properties; each group keeps declaration order with
    base classes ahead of subclasses.
    """
    names = _field_names(cls)
    names.extend(name for name in _property_names(cls) if name not in names)
    return names


def is_record(value: Any) -> bool:
    """True for values rendered by attribute even though they may be iterable."""
    if isinstance(value, Mapping):
        return True
    if isinstance(value, type):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return isinstance(value, tuple) and isinstance(getattr(type(value), "_fields", None), tuple)


def value_attributes(value: Any) -> list[tuple[str, Any]]:
    """
    Named attributes of a composite value, in display order.

    Mappings expose their items with the keys as attribute names. Other
    objects expose their declared fields, then any public instance attributes
    not already listed, then public properties. Declared fields that were never
    assigned are left out. Property getters are invoked
    here; their exceptions propagate to the caller.
    """
    if isinstance(value, Mapping):
        return [(str(key), item) for key, item in value.items()]

    cls = type(value)
    declared = _field_names(cls)
    # Declared fields and slots may be unset; those are skipped.
    attributes = [(name, getattr(value, name, MISSING)) for name in declared]
    attributes = [(name, item) for name, item in attributes if item is not MISSING]
    names = set(declared)

    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, item in instance_dict.items():
            if _is_public(name) and name not in names:
                attributes.append((name, item))
                names.add(name)
    for name in _property_names(cls):
        if name not in names:
            attributes.append((name, getattr(value, name)))
    return attributes
