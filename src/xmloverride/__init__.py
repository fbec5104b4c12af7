"""
Fluent XML Attribute Overrides

Builds the override table an XML-attribute-based serializer consults in
place of annotations on the serialized classes:

    overrides = (
        XmlOverrideBuilder()
        .configure(Country, lambda x: x.for_member(lambda c: c.name).xml_attribute("name"))
        .commit()
    )

This package produces override tables only.
Writing XML is the serializer's job.
"""

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
from xmloverride.builder import (
    OverrideMemberXml,
    OverrideRootXml,
    OverrideXmlClass,
    OverrideXmlSpec,
    XmlOverrideBuilder,
)
from xmloverride.members import InvalidMemberError, declaring_type, resolve_member
from xmloverride.model import (
    DuplicateOverrideError,
    XmlAttributeOverride,
    XmlAttributeOverrides,
    XmlAttributes,
    XmlOverrideError,
)

__version__ = "0.1.0"

__all__ = [
    "DuplicateOverrideError",
    "Facet",
    "InvalidMemberError",
    "OverrideMemberXml",
    "OverrideRootXml",
    "OverrideXmlClass",
    "OverrideXmlSpec",
    "XmlAnyAttributeAttribute",
    "XmlAnyElementAttribute",
    "XmlArrayAttribute",
    "XmlArrayItemAttribute",
    "XmlAttributeAttribute",
    "XmlAttributeOverride",
    "XmlAttributeOverrides",
    "XmlAttributes",
    "XmlElementAttribute",
    "XmlOverrideBuilder",
    "XmlOverrideError",
    "XmlRootAttribute",
    "XmlTextAttribute",
    "XmlTypeAttribute",
    "declaring_type",
    "resolve_member",
]
