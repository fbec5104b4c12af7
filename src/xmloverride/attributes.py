"""
XML Attribute Records

Each serialization facet an override can carry is represented by a small,
immutable record. These mirror the attribute classes an XML-attribute-based
serializer understands, field for field.

ARCHITECTURAL RULE:
    Records are values.
    They know nothing about the type or member they are attached to;
    that association lives in the override table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Facet(Enum):
    """
    Names of the facets an attribute bag can hold.

    The value is the key used in serialized override documents.
    """

    XML_ROOT = "xml_root"
    XML_TYPE = "xml_type"
    XMLNS = "xmlns"
    XML_DEFAULT_VALUE = "xml_default_value"
    XML_ATTRIBUTE = "xml_attribute"
    XML_ELEMENT = "xml_element"
    XML_ARRAY = "xml_array"
    XML_ARRAY_ITEMS = "xml_array_items"
    XML_ANY_ATTRIBUTE = "xml_any_attribute"
    XML_ANY_ELEMENTS = "xml_any_elements"
    XML_IGNORE = "xml_ignore"
    XML_TEXT = "xml_text"


@dataclass(frozen=True)
class XmlRootAttribute:
    """
    Controls the element emitted when an instance is the document root.

    Properties:
        element_name: Name of the root element (None keeps the type name)
        namespace: Namespace of the root element
    """

    element_name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class XmlTypeAttribute:
    """
    Controls the XML schema type name generated for a class.

    Properties:
        type_name: Name of the XML type
        namespace: Namespace of the XML type
    """

    type_name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class XmlAttributeAttribute:
    """Serialize the member as an XML attribute."""

    attribute_name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class XmlElementAttribute:
    """Serialize the member as an XML element."""

    element_name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class XmlArrayAttribute:
    """
    Serialize a sequence member as a wrapping element containing its items.

    Example:
        XmlArrayAttribute("countries") turns a list member into
        <countries><Country/>...</countries>
    """

    element_name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class XmlArrayItemAttribute:
    """
    Names the elements placed inside a serialized array.

    A member may carry several of these, one per item type.
    """

    element_name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class XmlAnyElementAttribute:
    """
    Marks a member that collects elements with no matching member.

    A member may carry several of these, each optionally restricted
    to a name and namespace.
    """

    name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class XmlAnyAttributeAttribute:
    """Marks a member that collects attributes with no matching member."""


@dataclass(frozen=True)
class XmlTextAttribute:
    """Serialize the member as the text content of its parent element."""

