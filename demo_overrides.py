"""
Demo: Build the continent/country override table and print it.
"""

import logging

from xmloverride.examples import build_example_overrides, build_example_overrides_raw
from xmloverride.serialization import overrides_to_yaml


def print_overrides(overrides):
    """Pretty-print an override table."""
    print()
    print("=" * 70)
    print(f"XML ATTRIBUTE OVERRIDES ({len(overrides)} records)")
    print("=" * 70)
    print()

    for cls in overrides.types():
        print(f"📦 {cls.__qualname__}")
        for record in overrides:
            if record.type is not cls:
                continue
            target = record.member if record.member is not None else "(root)"
            facets = ", ".join(f"{k}={v!r}" for k, v in record.attributes.facets().items())
            print(f"  {target:<12} {facets}")
        print()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    overrides = build_example_overrides()
    print_overrides(overrides)

    same = overrides == build_example_overrides_raw()
    print(f"{'✅' if same else '❌'} Builder output matches the hand-built table")
    print()

    print(overrides_to_yaml(overrides))
