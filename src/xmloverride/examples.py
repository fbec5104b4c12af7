"""
Example override configuration for a small continent/country model.

Builds the same override table twice: once with the fluent builder and once
by adding XmlAttributes records by hand. The two results are equal.
"""
from dataclasses import dataclass, field
from typing import List

from xmloverride.attributes import XmlAttributeAttribute, XmlElementAttribute, XmlRootAttribute
from xmloverride.builder import OverrideXmlClass, XmlOverrideBuilder
from xmloverride.model import XmlAttributeOverrides, XmlAttributes


@dataclass
class Country:
    name: str = ""
    capital: str = ""


@dataclass
class Continent:
    name: str = ""
    countries: List[Country] = field(default_factory=list)


def _configure_continent(x: OverrideXmlClass[Continent]) -> None:
    x.for_root().xml_root("continent")
    x.for_member(lambda c: c.name).xml_attribute("name")
    x.for_member(lambda c: c.countries).xml_element("state")


def _configure_country(x: OverrideXmlClass[Country]) -> None:
    x.for_member(lambda c: c.name).xml_attribute("name")
    x.for_member(lambda c: c.capital).xml_attribute("capital")


def build_example_overrides() -> XmlAttributeOverrides:
    return (
        XmlOverrideBuilder()
        .configure(Continent, _configure_continent)
        .configure(Country, _configure_country)
        .commit()
    )


def build_example_overrides_raw() -> XmlAttributeOverrides:
    overrides = XmlAttributeOverrides()

    overrides.add(Continent, XmlAttributes(xml_root=XmlRootAttribute("continent")))

    overrides.add(Continent, XmlAttributes(xml_attribute=XmlAttributeAttribute("name")), member="name")

    overrides.add(Continent, XmlAttributes(xml_element=XmlElementAttribute("state")), member="countries")

    overrides.add(Country, XmlAttributes(xml_attribute=XmlAttributeAttribute("name")), member="name")

    overrides.add(Country, XmlAttributes(xml_attribute=XmlAttributeAttribute("capital")), member="capital")

    return overrides
