"""
Fluent Override Builder

Builds an XmlAttributeOverrides table from chained calls instead of
constructing XmlAttributes records by hand.

Example:
    overrides = (
        XmlOverrideBuilder()
        .configure(Continent, lambda x: (
            x.for_root().xml_root("continent"),
            x.for_member(lambda c: c.name).xml_attribute("name"),
        ))
        .commit()
    )

Flow:
    XmlOverrideBuilder.configure(cls, callback)
        -> OverrideXmlClass scoped to cls
        -> callback registers OverrideRootXml / OverrideMemberXml specs
    XmlOverrideBuilder.commit()
        -> each spec compiles to an XmlAttributeOverride
        -> records are added to a fresh XmlAttributeOverrides
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

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
from .members import MemberAccessor, resolve_member
from .model import XmlAttributeOverride, XmlAttributeOverrides, XmlAttributes

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OverrideXmlSpec:
    """
    Base class for the fluent specs.

    A spec accumulates facets for one (type, member) pair in its own
    XmlAttributes bag and compiles to a single override record.
    """

    def __init__(self, cls: type) -> None:
        self._class = cls
        self._attributes = XmlAttributes()

    @property
    def member(self) -> Optional[str]:
        return None

    def compile(self) -> XmlAttributeOverride:
        """Snapshot the accumulated facets as an override record."""
        return XmlAttributeOverride(
            type=self._class,
            member=self.member,
            attributes=self._attributes.copy(),
        )


class OverrideRootXml(OverrideXmlSpec, Generic[T]):
    """A fluent overrider for class-level XML facets."""

    def xmlns(self, value: bool) -> OverrideRootXml[T]:
        """
        Whether to keep all namespace declarations when an object containing
        a member that returns namespace declarations is overridden.
        """
        self._attributes.xmlns = value
        return self

    def xml_root(self, element_name: str) -> OverrideRootXml[T]:
        """Name the XML root element."""
        return self.attr(XmlRootAttribute(element_name))

    def xml_type(self, type_name: str) -> OverrideRootXml[T]:
        """Name the XML type generated when the class is serialized."""
        return self.attr(XmlTypeAttribute(type_name))

    def xml_default_value(self, value: Any) -> OverrideRootXml[T]:
        self._attributes.xml_default_value = value
        return self

    def attr(self, attribute: Any) -> OverrideRootXml[T]:
        """
        Set a full root or type record, e.g. to supply a namespace.

        Raises:
            TypeError: If the record is not a class-level attribute
        """
        if isinstance(attribute, XmlRootAttribute):
            self._attributes.xml_root = attribute
        elif isinstance(attribute, XmlTypeAttribute):
            self._attributes.xml_type = attribute
        else:
            raise TypeError(
                f"{type(attribute).__name__} cannot be applied at class level"
            )
        return self


class OverrideMemberXml(OverrideXmlSpec, Generic[T]):
    """
    A fluent overrider for one member's XML facets.

    The member is resolved when the spec is created, so an accessor that
    does not name a member of the class fails immediately.

    xml_array_item and xml_any_element append; every other setter overwrites.
    """

    def __init__(self, cls: type, accessor: MemberAccessor) -> None:
        super().__init__(cls)
        self._member = resolve_member(cls, accessor)

    @property
    def member(self) -> Optional[str]:
        return self._member

    def xml_any_attribute(self) -> OverrideMemberXml[T]:
        """The member collects XML attributes with no corresponding member."""
        return self.attr(XmlAnyAttributeAttribute())

    def xml_text(self) -> OverrideMemberXml[T]:
        """The member is serialized as the text of its parent element."""
        return self.attr(XmlTextAttribute())

    def xml_ignore(self, ignore: bool = True) -> OverrideMemberXml[T]:
        """Whether the member is skipped by the serializer."""
        self._attributes.xml_ignore = ignore
        return self

    def xml_array(self, element_name: Optional[str] = None) -> OverrideMemberXml[T]:
        """Serialize the member as an array of XML elements."""
        return self.attr(XmlArrayAttribute(element_name))

    def xml_array_item(self, element_name: Optional[str] = None) -> OverrideMemberXml[T]:
        """Add an item declaration to the serialized array."""
        return self.attr(XmlArrayItemAttribute(element_name))

    def xml_attribute(self, name: Optional[str] = None) -> OverrideMemberXml[T]:
        """Serialize the member as an XML attribute."""
        return self.attr(XmlAttributeAttribute(name))

    def xml_element(self, name: Optional[str] = None) -> OverrideMemberXml[T]:
        """Serialize the member as an XML element."""
        return self.attr(XmlElementAttribute(name))

    def xml_any_element(
        self, name: Optional[str] = None, namespace: Optional[str] = None
    ) -> OverrideMemberXml[T]:
        """
        Add a catch-all declaration for elements with no corresponding
        member, optionally restricted to a name and namespace.
        """
        return self.attr(XmlAnyElementAttribute(name, namespace))

    def xml_default_value(self, value: Any) -> OverrideMemberXml[T]:
        """The default value of the XML element or attribute."""
        self._attributes.xml_default_value = value
        return self

    def attr(self, attribute: Any) -> OverrideMemberXml[T]:
        """
        Apply a full member-level record.

        Raises:
            TypeError: If the record cannot be applied to a member
        """
        bag = self._attributes
        if isinstance(attribute, XmlArrayItemAttribute):
            bag.xml_array_items.append(attribute)
        elif isinstance(attribute, XmlAnyElementAttribute):
            bag.xml_any_elements.append(attribute)
        elif isinstance(attribute, XmlAttributeAttribute):
            bag.xml_attribute = attribute
        elif isinstance(attribute, XmlElementAttribute):
            bag.xml_element = attribute
        elif isinstance(attribute, XmlArrayAttribute):
            bag.xml_array = attribute
        elif isinstance(attribute, XmlAnyAttributeAttribute):
            bag.xml_any_attribute = attribute
        elif isinstance(attribute, XmlTextAttribute):
            bag.xml_text = attribute
        else:
            raise TypeError(
                f"{type(attribute).__name__} cannot be applied to a member"
            )
        return self


class OverrideXmlClass(Generic[T]):
    """
    Contains the XML override configuration for one class.

    Every spec handed out is remembered, in order, so the builder can
    collect them once the configuration callback returns.
    """

    def __init__(self, cls: type) -> None:
        self._class = cls
        self._overrides: List[OverrideXmlSpec] = []

    @property
    def overrides(self) -> Tuple[OverrideXmlSpec, ...]:
        return tuple(self._overrides)

    def for_root(self) -> OverrideRootXml[T]:
        """Start a fluent overrider for class-level facets."""
        spec: OverrideRootXml[T] = OverrideRootXml(self._class)
        self._overrides.append(spec)
        logger.debug("Registered root override %s", self._class.__qualname__)
        return spec

    def for_member(self, accessor: MemberAccessor) -> OverrideMemberXml[T]:
        """
        Start a fluent overrider for one member.

        Args:
            accessor: e.g. lambda country: country.capital, or "capital"

        Raises:
            InvalidMemberError: If accessor does not name a member of the class
        """
        spec: OverrideMemberXml[T] = OverrideMemberXml(self._class, accessor)
        self._overrides.append(spec)
        logger.debug("Registered member override %s.%s", self._class.__qualname__, spec.member)
        return spec


class XmlOverrideBuilder:
    """
    A builder for XmlAttributeOverrides tables.

    The builder does not check for conflicting specs. Two root specs for
    the same class are accepted here and rejected by the override table
    when commit() adds the second one.
    """

    def __init__(self) -> None:
        self._overrides: List[OverrideXmlSpec] = []

    def configure(
        self, cls: type, configurator: Callable[[OverrideXmlClass[Any]], Any]
    ) -> XmlOverrideBuilder:
        """
        Fluently configure the XML overrides of one class.

        Specs are only added to the builder after the callback returns,
        so a callback that raises leaves the builder unchanged.

        Args:
            cls: The class to override
            configurator: Callback receiving the class-scoped configurator
        """
        class_overrides: OverrideXmlClass[Any] = OverrideXmlClass(cls)
        configurator(class_overrides)
        self._overrides.extend(class_overrides.overrides)
        logger.debug(
            "Configured %d override spec(s) for %s",
            len(class_overrides.overrides),
            cls.__qualname__,
        )
        return self

    def commit(self) -> XmlAttributeOverrides:
        """
        Compile every spec into a new XmlAttributeOverrides table.

        Raises:
            DuplicateOverrideError: If two specs target the same (type, member)
        """
        overrides = XmlAttributeOverrides()
        for override in (spec.compile() for spec in self._overrides):
            overrides.add(override.type, override.attributes, member=override.member)
        logger.debug("Committed %d override record(s)", len(overrides))
        return overrides
