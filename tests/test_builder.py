"""
Tests for the fluent override builder.

These tests verify:
    - Each fluent call sets exactly one facet
    - Overwriting vs additive facets
    - Fail-fast member validation with no effect on the builder
    - commit() produces fresh, independent tables
    - Duplicate overrides surface from the table on commit
    - Root and member registrations are logged at debug level
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pytest
from xmloverride.attributes import (
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
    XmlOverrideBuilder,
)
from xmloverride.members import InvalidMemberError
from xmloverride.model import DuplicateOverrideError, XmlAttributes


@dataclass
class Book:
    title: str = ""
    isbn: str = ""
    body: str = ""
    tags: List[str] = field(default_factory=list)
    extras: List[object] = field(default_factory=list)
    edition: int = 1


@dataclass
class EBook(Book):
    file_size: Optional[int] = None


@dataclass
class Library:
    books: List[Book] = field(default_factory=list)


def commit_member(cls, accessor, configure):
    """Build a table holding one member spec and return its bag."""
    builder = XmlOverrideBuilder()
    builder.configure(cls, lambda x: configure(x.for_member(accessor)))
    table = builder.commit()
    return table[cls, next(iter(table)).member]


def commit_root(cls, configure):
    builder = XmlOverrideBuilder()
    builder.configure(cls, lambda x: configure(x.for_root()))
    return builder.commit()[cls]


class TestRootSpec:
    """Test class-level facets."""

    def test_xml_root(self):
        attrs = commit_root(Book, lambda r: r.xml_root("book"))
        assert attrs == XmlAttributes(xml_root=XmlRootAttribute("book"))

    def test_xml_type(self):
        attrs = commit_root(Book, lambda r: r.xml_type("BookType"))
        assert attrs.xml_type == XmlTypeAttribute("BookType")

    def test_xmlns(self):
        attrs = commit_root(Book, lambda r: r.xmlns(True))
        assert attrs.xmlns is True

    def test_default_value(self):
        attrs = commit_root(Book, lambda r: r.xml_default_value("untitled"))
        assert attrs.xml_default_value == "untitled"

    def test_attr_with_namespace(self):
        """Full records carry details the shortcuts do not."""
        root = XmlRootAttribute("book", namespace="urn:books")
        xml_type = XmlTypeAttribute("BookType", namespace="urn:types")
        attrs = commit_root(Book, lambda r: r.attr(root).attr(xml_type))
        assert attrs.xml_root == root
        assert attrs.xml_type == xml_type

    def test_attr_rejects_member_records(self):
        spec = OverrideRootXml(Book)
        with pytest.raises(TypeError):
            spec.attr(XmlAttributeAttribute("title"))

    def test_overwrite_keeps_last(self):
        """Setting a facet twice keeps the last value only."""
        attrs = commit_root(Book, lambda r: r.xml_root("first").xml_root("second"))
        assert attrs.xml_root == XmlRootAttribute("second")

    def test_chaining_returns_same_spec(self):
        spec = OverrideRootXml(Book)
        assert spec.xml_root("book") is spec
        assert spec.xml_type("BookType") is spec
        assert spec.xmlns(False) is spec
        assert spec.xml_default_value(None) is spec

    def test_unset_facets_omitted(self):
        attrs = commit_root(Book, lambda r: r.xml_root("book"))
        assert attrs.facets() == {"xml_root": XmlRootAttribute("book")}

    def test_compile_has_no_member(self):
        record = OverrideRootXml(Book).xml_root("book").compile()
        assert record.type is Book
        assert record.member is None


class TestMemberSpec:
    """Test member-level facets."""

    def test_xml_attribute(self):
        attrs = commit_member(Book, lambda b: b.isbn, lambda m: m.xml_attribute("isbn"))
        assert attrs == XmlAttributes(xml_attribute=XmlAttributeAttribute("isbn"))

    def test_unnamed_xml_attribute(self):
        attrs = commit_member(Book, lambda b: b.isbn, lambda m: m.xml_attribute())
        assert attrs.xml_attribute == XmlAttributeAttribute()

    def test_xml_element(self):
        attrs = commit_member(Book, lambda b: b.title, lambda m: m.xml_element("name"))
        assert attrs.xml_element == XmlElementAttribute("name")

    def test_xml_array(self):
        attrs = commit_member(Book, lambda b: b.tags, lambda m: m.xml_array("tags"))
        assert attrs.xml_array == XmlArrayAttribute("tags")

    def test_xml_text(self):
        attrs = commit_member(Book, lambda b: b.body, lambda m: m.xml_text())
        assert attrs.xml_text == XmlTextAttribute()

    def test_xml_any_attribute(self):
        attrs = commit_member(Book, lambda b: b.extras, lambda m: m.xml_any_attribute())
        assert attrs.xml_any_attribute == XmlAnyAttributeAttribute()

    def test_xml_ignore_defaults_to_true(self):
        attrs = commit_member(Book, lambda b: b.edition, lambda m: m.xml_ignore())
        assert attrs.xml_ignore is True

    def test_xml_ignore_false(self):
        attrs = commit_member(Book, lambda b: b.edition, lambda m: m.xml_ignore(False))
        assert attrs.xml_ignore is False

    def test_default_value(self):
        attrs = commit_member(Book, lambda b: b.edition, lambda m: m.xml_default_value(1))
        assert attrs.xml_default_value == 1

    def test_overwrite_keeps_last(self):
        attrs = commit_member(
            Book,
            lambda b: b.isbn,
            lambda m: m.xml_attribute("isbn").xml_attribute("id"),
        )
        assert attrs.xml_attribute == XmlAttributeAttribute("id")

    def test_array_items_are_additive(self):
        """Each xml_array_item call adds an entry, in call order."""
        attrs = commit_member(
            Book,
            lambda b: b.tags,
            lambda m: m.xml_array("tags").xml_array_item("tag").xml_array_item("label").xml_array_item(),
        )
        assert attrs.xml_array_items == [
            XmlArrayItemAttribute("tag"),
            XmlArrayItemAttribute("label"),
            XmlArrayItemAttribute(),
        ]

    def test_any_elements_are_additive(self):
        attrs = commit_member(
            Book,
            lambda b: b.extras,
            lambda m: m.xml_any_element().xml_any_element("note").xml_any_element("meta", "urn:meta"),
        )
        assert attrs.xml_any_elements == [
            XmlAnyElementAttribute(),
            XmlAnyElementAttribute("note"),
            XmlAnyElementAttribute("meta", "urn:meta"),
        ]

    def test_any_element_namespace_only(self):
        attrs = commit_member(
            Book, lambda b: b.extras, lambda m: m.xml_any_element(namespace="urn:x")
        )
        assert attrs.xml_any_elements == [XmlAnyElementAttribute(None, "urn:x")]

    def test_attr_dispatch(self):
        """attr() routes each record to its facet."""
        attrs = commit_member(
            Book,
            lambda b: b.tags,
            lambda m: (
                m.attr(XmlArrayAttribute("tags", namespace="urn:b"))
                .attr(XmlArrayItemAttribute("tag"))
                .attr(XmlArrayItemAttribute("label"))
            ),
        )
        assert attrs.xml_array == XmlArrayAttribute("tags", "urn:b")
        assert len(attrs.xml_array_items) == 2

    def test_attr_rejects_root_records(self):
        spec = OverrideMemberXml(Book, lambda b: b.title)
        with pytest.raises(TypeError):
            spec.attr(XmlRootAttribute("book"))

    def test_chaining_returns_same_spec(self):
        spec = OverrideMemberXml(Book, lambda b: b.tags)
        assert spec.xml_array() is spec
        assert spec.xml_array_item("tag") is spec
        assert spec.xml_ignore() is spec
        assert spec.xml_text() is spec

    def test_member_from_string(self):
        spec = OverrideMemberXml(Book, "isbn")
        assert spec.member == "isbn"

    def test_inherited_member(self):
        """Members of a base class can be overridden on the subclass."""
        builder = XmlOverrideBuilder().configure(
            EBook, lambda x: x.for_member(lambda e: e.title).xml_attribute("title")
        )
        table = builder.commit()
        assert (EBook, "title") in table
        assert (Book, "title") not in table

    def test_invalid_member_fails_at_construction(self):
        with pytest.raises(InvalidMemberError):
            OverrideMemberXml(Book, lambda b: b.file_size)


class TestClassConfigurator:
    """Test OverrideXmlClass registration."""

    def test_specs_registered_in_order(self):
        config = OverrideXmlClass(Book)
        root = config.for_root()
        title = config.for_member(lambda b: b.title)
        isbn = config.for_member(lambda b: b.isbn)
        assert config.overrides == (root, title, isbn)

    def test_invalid_member_not_registered(self):
        config = OverrideXmlClass(Book)
        config.for_member(lambda b: b.title)
        with pytest.raises(InvalidMemberError):
            config.for_member(lambda b: b.missing)
        assert len(config.overrides) == 1

    def test_second_root_not_rejected_locally(self):
        config = OverrideXmlClass(Book)
        config.for_root()
        config.for_root()
        assert len(config.overrides) == 2


class TestBuilder:
    """Test XmlOverrideBuilder configure/commit."""

    def test_configure_returns_builder(self):
        builder = XmlOverrideBuilder()
        assert builder.configure(Book, lambda x: None) is builder

    def test_empty_builder_commits_empty_table(self):
        assert len(XmlOverrideBuilder().commit()) == 0

    def test_multiple_types(self):
        def configure_book(x):
            x.for_root().xml_root("book")
            x.for_member(lambda b: b.title).xml_attribute("title")

        table = (
            XmlOverrideBuilder()
            .configure(Book, configure_book)
            .configure(Library, lambda x: x.for_member(lambda lib: lib.books).xml_array("books"))
            .commit()
        )
        assert [(o.type, o.member) for o in table] == [
            (Book, None),
            (Book, "title"),
            (Library, "books"),
        ]

    def test_failed_configure_leaves_builder_unchanged(self):
        """An invalid member aborts the whole configure call."""
        builder = XmlOverrideBuilder().configure(
            Library, lambda x: x.for_member(lambda lib: lib.books).xml_array()
        )

        def configure_book(x):
            x.for_root().xml_root("book")
            x.for_member(lambda b: b.publisher).xml_attribute()

        with pytest.raises(InvalidMemberError):
            builder.configure(Book, configure_book)

        table = builder.commit()
        assert len(table) == 1
        assert Book not in table

    def test_commit_twice_equal_but_independent(self):
        builder = XmlOverrideBuilder().configure(
            Book, lambda x: x.for_member(lambda b: b.tags).xml_array_item("tag")
        )
        first = builder.commit()
        second = builder.commit()

        assert first == second
        assert first is not second
        assert first[Book, "tags"] is not second[Book, "tags"]

        first[Book, "tags"].xml_array_items.append(XmlArrayItemAttribute("other"))
        assert second[Book, "tags"].xml_array_items == [XmlArrayItemAttribute("tag")]

    def test_spec_changes_after_commit_do_not_leak(self):
        specs = []
        builder = XmlOverrideBuilder().configure(
            Book, lambda x: specs.append(x.for_member(lambda b: b.isbn).xml_attribute("isbn"))
        )
        table = builder.commit()
        specs[0].xml_attribute("id")

        assert table[Book, "isbn"].xml_attribute == XmlAttributeAttribute("isbn")
        assert builder.commit()[Book, "isbn"].xml_attribute == XmlAttributeAttribute("id")

    def test_duplicate_root_surfaces_on_commit(self):
        """Two root specs for one class are accepted until commit."""
        def configure_book(x):
            x.for_root().xml_root("book")
            x.for_root().xml_type("BookType")

        builder = XmlOverrideBuilder().configure(Book, configure_book)
        with pytest.raises(DuplicateOverrideError):
            builder.commit()

    def test_duplicate_member_across_configure_calls(self):
        builder = (
            XmlOverrideBuilder()
            .configure(Book, lambda x: x.for_member(lambda b: b.title).xml_attribute())
            .configure(Book, lambda x: x.for_member("title").xml_element())
        )
        with pytest.raises(DuplicateOverrideError):
            builder.commit()


class TestLogging:
    """Override registration is logged at debug level."""

    def test_root_registration_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="xmloverride.builder"):
            OverrideXmlClass(Book).for_root()
        assert "Registered root override Book" in caplog.text

    def test_member_registration_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="xmloverride.builder"):
            OverrideXmlClass(Book).for_member(lambda b: b.isbn)
        assert "Registered member override Book.isbn" in caplog.text
