"""
Member Resolver

Turns a member accessor into the member name used as an override table key.

An accessor is either:
    - a one-argument callable performing a single attribute access,
      e.g. lambda country: country.capital
    - the member name itself, e.g. "capital"

Callables are never run against a real instance. They receive a recording
stand-in, and the name of the one attribute they touched is taken from it.

A member counts as declared on a class when the class or one of its bases
defines it as an annotated field (dataclass fields included), a property,
a slot, or a plain class attribute. Methods are not members.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, List, Optional, Set, Union

from .model import XmlOverrideError


class InvalidMemberError(XmlOverrideError, ValueError):
    """Raised when an accessor does not denote a member of the configured type."""
    pass


MemberAccessor = Union[str, Callable[[Any], Any]]


class _MemberAccess:
    """Result of one attribute access on a recording stand-in."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __getattr__(self, item: str) -> Any:
        raise InvalidMemberError(
            f"'.{self.name}.{item}' is not a direct member access"
        )

    def __bool__(self) -> bool:
        raise InvalidMemberError(
            f"Member '{self.name}' was used in a computed expression"
        )


class _MemberRecorder:
    """
    Stand-in instance that records every attribute read from it.

    The record list is owned by the caller and kept in a name-mangled slot,
    so every ordinary member name reaches __getattr__.
    """

    __slots__ = ("__accessed",)

    def __init__(self, accessed: List[_MemberAccess]) -> None:
        self.__accessed = accessed

    def __getattr__(self, name: str) -> _MemberAccess:
        access = _MemberAccess(name)
        self.__accessed.append(access)
        return access


def _name_from_accessor(accessor: Callable[[Any], Any]) -> str:
    accessed: List[_MemberAccess] = []
    try:
        result = accessor(_MemberRecorder(accessed))
    except InvalidMemberError:
        raise
    except Exception as exc:
        raise InvalidMemberError("A member expression was not provided") from exc

    if (
        not isinstance(result, _MemberAccess)
        or len(accessed) != 1
        or accessed[0] is not result
    ):
        raise InvalidMemberError("A member expression was not provided")
    return result.name


def _declared_members(klass: type) -> Set[str]:
    """Members declared directly on klass, ignoring its bases."""
    names: Set[str] = set(inspect.get_annotations(klass))

    for name, value in vars(klass).items():
        if name.startswith("__") and name.endswith("__"):
            continue
        if isinstance(value, property):
            names.add(name)
        elif isinstance(value, (staticmethod, classmethod)) or inspect.isfunction(value):
            continue
        else:
            names.add(name)

    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    names.update(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def declaring_type(cls: type, name: str) -> Optional[type]:
    """
    Find the class in cls's MRO that declares member `name`.

    Returns:
        The declaring class, or None if neither cls nor any base declares it
    """
    for klass in cls.__mro__:
        if klass is object:
            continue
        if name in _declared_members(klass):
            return klass
    return None


def resolve_member(cls: type, accessor: MemberAccessor) -> str:
    """
    Resolve an accessor to the name of a member declared on (or inherited by) cls.

    Args:
        cls: The type being configured
        accessor: Member name, or callable such as lambda c: c.name

    Returns:
        The member name

    Raises:
        InvalidMemberError: If the accessor is not a single direct member
            access, or the member is not declared on cls or its bases
    """
    if not isinstance(cls, type):
        raise TypeError(f"Expected a class, got {cls!r}")

    if isinstance(accessor, str):
        name = accessor
    elif callable(accessor):
        name = _name_from_accessor(accessor)
    else:
        raise InvalidMemberError(
            f"Expected a member name or accessor callable, got {accessor!r}"
        )

    if declaring_type(cls, name) is None:
        raise InvalidMemberError(
            f"'{name}' is not a member of {cls.__qualname__} or its base classes"
        )
    return name
