"""
Serialization helpers for override tables.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Types are written as "module:qualname" and imported again on load, so only
types importable at module level can be round-tripped.
"""
from __future__ import annotations

import importlib
import json
from typing import Any, Dict, List, Optional

import yaml

from xmloverride.attributes import (
    Facet,
    XmlAnyAttributeAttribute,
    XmlAnyElementAttribute,
    XmlArrayAttribute,
    XmlArrayItemAttribute,
    XmlAttributeAttribute,
    XmlElementAttribute,
    XmlRootAttribute,
    XmlTextAttribute,
    XmlTypeAttribute,
)
from xmloverride.model import XmlAttributeOverrides, XmlAttributes, XmlOverrideError


class OverrideSerializationError(XmlOverrideError):
    """Raised when an override document cannot be written or read."""
    pass


def _named_to_dict(attr: Any, name_field: str) -> Dict[str, Any]:
    d = {name_field: getattr(attr, name_field)}
    if attr.namespace is not None:
        d["namespace"] = attr.namespace
    return d


_RECORD_FIELDS: Dict[Facet, tuple] = {
    Facet.XML_ROOT: (XmlRootAttribute, "element_name"),
    Facet.XML_TYPE: (XmlTypeAttribute, "type_name"),
    Facet.XML_ATTRIBUTE: (XmlAttributeAttribute, "attribute_name"),
    Facet.XML_ELEMENT: (XmlElementAttribute, "element_name"),
    Facet.XML_ARRAY: (XmlArrayAttribute, "element_name"),
    Facet.XML_ARRAY_ITEMS: (XmlArrayItemAttribute, "element_name"),
    Facet.XML_ANY_ELEMENTS: (XmlAnyElementAttribute, "name"),
}

_MARKERS: Dict[Facet, type] = {
    Facet.XML_ANY_ATTRIBUTE: XmlAnyAttributeAttribute,
    Facet.XML_TEXT: XmlTextAttribute,
}

_SCALARS = (Facet.XMLNS, Facet.XML_DEFAULT_VALUE, Facet.XML_IGNORE)

_LISTS = (Facet.XML_ARRAY_ITEMS, Facet.XML_ANY_ELEMENTS)


def attributes_to_dict(attrs: XmlAttributes) -> Dict[str, Any]:
    """Dict of the set facets only; unset facets are omitted."""
    d: Dict[str, Any] = {}
    for key, value in attrs.facets().items():
        facet = Facet(key)
        if facet in _SCALARS:
            d[key] = value
        elif facet in _MARKERS:
            d[key] = {}
        elif facet in _LISTS:
            _, name_field = _RECORD_FIELDS[facet]
            d[key] = [_named_to_dict(item, name_field) for item in value]
        else:
            _, name_field = _RECORD_FIELDS[facet]
            d[key] = _named_to_dict(value, name_field)
    return d


def _named_from_dict(facet: Facet, d: Any) -> Any:
    record_type, name_field = _RECORD_FIELDS[facet]
    if not isinstance(d, dict):
        raise OverrideSerializationError(
            f"{facet.value} expects a mapping with '{name_field}', got {d!r}"
        )
    return record_type(**{name_field: d.get(name_field), "namespace": d.get("namespace")})


def attributes_from_dict(d: Any) -> XmlAttributes:
    if not isinstance(d, dict):
        raise OverrideSerializationError(f"Attributes must be a mapping, got {d!r}")
    attrs = XmlAttributes()
    for key, value in d.items():
        try:
            facet = Facet(key)
        except ValueError:
            raise OverrideSerializationError(f"Unknown facet: {key}") from None
        if facet in _SCALARS:
            setattr(attrs, key, value)
        elif facet in _MARKERS:
            setattr(attrs, key, _MARKERS[facet]())
        elif facet in _LISTS:
            if not isinstance(value, list):
                raise OverrideSerializationError(f"{key} must be a list, got {value!r}")
            setattr(attrs, key, [_named_from_dict(facet, item) for item in value])
        else:
            setattr(attrs, key, _named_from_dict(facet, value))
    return attrs


def type_to_ref(cls: type) -> str:
    if "<locals>" in cls.__qualname__:
        raise OverrideSerializationError(
            f"{cls.__qualname__} is defined inside a function and cannot be referenced"
        )
    return f"{cls.__module__}:{cls.__qualname__}"


def type_from_ref(ref: str) -> type:
    if not isinstance(ref, str):
        raise OverrideSerializationError(f"Type reference must be a string, got {ref!r}")
    module_name, sep, qualname = ref.partition(":")
    if not sep or not qualname:
        raise OverrideSerializationError(f"Malformed type reference: {ref!r}")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as exc:
        raise OverrideSerializationError(f"Cannot import type {ref!r}") from exc
    if not isinstance(obj, type):
        raise OverrideSerializationError(f"{ref!r} does not refer to a class")
    return obj


def overrides_to_dict(overrides: XmlAttributeOverrides) -> Dict[str, Any]:
    return {
        "overrides": [
            {
                "type": type_to_ref(o.type),
                "member": o.member,
                "attributes": attributes_to_dict(o.attributes),
            }
            for o in overrides
        ]
    }


def overrides_from_dict(d: Any) -> XmlAttributeOverrides:
    if not isinstance(d, dict):
        raise OverrideSerializationError(f"Override document must be a mapping, got {d!r}")
    overrides = XmlAttributeOverrides()
    entries: List[Dict[str, Any]] = d.get("overrides") or []
    if not isinstance(entries, list):
        raise OverrideSerializationError(f"'overrides' must be a list, got {entries!r}")
    for entry in entries:
        if not isinstance(entry, dict) or "type" not in entry:
            raise OverrideSerializationError(f"Override entry without a type: {entry!r}")
        member: Optional[str] = entry.get("member")
        if member is not None and not isinstance(member, str):
            raise OverrideSerializationError(f"Member name must be a string, got {member!r}")
        overrides.add(
            type_from_ref(entry["type"]),
            attributes_from_dict(entry.get("attributes") or {}),
            member=member,
        )
    return overrides


def overrides_to_json(overrides: XmlAttributeOverrides) -> str:
    try:
        return json.dumps(overrides_to_dict(overrides), sort_keys=True)
    except (TypeError, ValueError) as exc:
        raise OverrideSerializationError(f"Cannot write overrides as JSON: {exc}") from exc


def overrides_from_json(s: str) -> XmlAttributeOverrides:
    d = json.loads(s)
    return overrides_from_dict(d)


def overrides_to_yaml(overrides: XmlAttributeOverrides) -> str:
    try:
        return yaml.safe_dump(overrides_to_dict(overrides))
    except yaml.YAMLError as exc:
        raise OverrideSerializationError(f"Cannot write overrides as YAML: {exc}") from exc


def overrides_from_yaml(s: str) -> XmlAttributeOverrides:
    d = yaml.safe_load(s)
    return overrides_from_dict({} if d is None else d)
