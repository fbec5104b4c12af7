"""
Override Model Objects

Defines the data structures an XML serializer consults instead of
compiled-in annotations:
    - XmlAttributes (the configuration bag for one type or member)
    - XmlAttributeOverride (one record: type, member, bag)
    - XmlAttributeOverrides (the override table)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about the fluent builder
        - Hold facet values only, never XML output
        - Are fully serializable (see xmloverride.serialization)
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .attributes import (
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


class XmlOverrideError(Exception):
    """Base class for all errors raised by this package."""
    pass


class DuplicateOverrideError(XmlOverrideError):
    """Raised when a (type, member) pair is added to an override table twice."""
    pass


ADDITIVE_FACETS = ("xml_array_items", "xml_any_elements")


@dataclass
class XmlAttributes:
    """
    The set of serialization facets configured for one type or member.

    Unset facets are None. The two additive facets, xml_array_items and
    xml_any_elements, are lists and are unset when empty.

    Properties:
        xml_root: Root element name/namespace (type level)
        xml_type: XML schema type name/namespace (type level)
        xmlns: Keep namespace declarations of an XmlSerializerNamespaces member
        xml_default_value: Value treated as the default (not written)
        xml_attribute: Serialize as an attribute
        xml_element: Serialize as an element
        xml_array: Serialize a sequence as a wrapping element
        xml_array_items: Element names of the array items, in declaration order
        xml_any_attribute: Collect unmatched attributes
        xml_any_elements: Collect unmatched elements, in declaration order
        xml_ignore: Skip the member entirely
        xml_text: Serialize as text content
    """

    xml_root: Optional[XmlRootAttribute] = None
    xml_type: Optional[XmlTypeAttribute] = None
    xmlns: Optional[bool] = None
    xml_default_value: Any = None
    xml_attribute: Optional[XmlAttributeAttribute] = None
    xml_element: Optional[XmlElementAttribute] = None
    xml_array: Optional[XmlArrayAttribute] = None
    xml_array_items: List[XmlArrayItemAttribute] = field(default_factory=list)
    xml_any_attribute: Optional[XmlAnyAttributeAttribute] = None
    xml_any_elements: List[XmlAnyElementAttribute] = field(default_factory=list)
    xml_ignore: Optional[bool] = None
    xml_text: Optional[XmlTextAttribute] = None

    def copy(self) -> XmlAttributes:
        """Return an independent bag with the same facet values."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["xml_array_items"] = list(self.xml_array_items)
        values["xml_any_elements"] = list(self.xml_any_elements)
        return XmlAttributes(**values)

    def facets(self) -> Dict[str, Any]:
        """Return the set facets only, in declaration order."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in ADDITIVE_FACETS and not value:
                continue
            result[f.name] = value
        return result

    def is_empty(self) -> bool:
        return not self.facets()


@dataclass(frozen=True)
class XmlAttributeOverride:
    """
    One entry of an override table.

    Properties:
        type: The class being overridden
        member: Member name, or None for a type-level (root) override
        attributes: The facets applied
    """

    type: type
    member: Optional[str]
    attributes: XmlAttributes


OverrideKey = Tuple[type, Optional[str]]


class XmlAttributeOverrides:
    """
    The override table handed to an XML serializer.

    Holds at most one XmlAttributes bag per (type, member) pair, where a
    member of None stands for the type itself. Adding the same pair twice
    raises DuplicateOverrideError; nothing is merged.

    Equality is structural: two tables are equal when they hold the same
    (type, member, facets) triples, whatever order they were added in.
    """

    def __init__(self) -> None:
        self._entries: Dict[OverrideKey, XmlAttributes] = {}

    def add(self, cls: type, attributes: XmlAttributes, member: Optional[str] = None) -> None:
        """
        Register the facets for a type (member=None) or one of its members.

        Raises:
            DuplicateOverrideError: If the pair already has an entry
        """
        key = (cls, member)
        if key in self._entries:
            target = cls.__qualname__ if member is None else f"{cls.__qualname__}.{member}"
            raise DuplicateOverrideError(f"Overrides for {target} were already added")
        self._entries[key] = attributes

    def get(self, cls: type, member: Optional[str] = None) -> Optional[XmlAttributes]:
        return self._entries.get((cls, member))

    def types(self) -> List[type]:
        """Distinct overridden types, in the order they were first added."""
        seen: List[type] = []
        for cls, _ in self._entries:
            if cls not in seen:
                seen.append(cls)
        return seen

    def __getitem__(self, key: Union[type, OverrideKey]) -> XmlAttributes:
        if not isinstance(key, tuple):
            key = (key, None)
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple):
            key = (key, None)
        return key in self._entries

    def __iter__(self) -> Iterator[XmlAttributeOverride]:
        for (cls, member), attributes in self._entries.items():
            yield XmlAttributeOverride(type=cls, member=member, attributes=attributes)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XmlAttributeOverrides):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"XmlAttributeOverrides({list(self)!r})"
