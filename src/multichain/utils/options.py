"""
Layered option resolution: engine defaults, currency options, call overrides
"""

from typing import Any, Mapping, Optional


def resolve_options(*sources: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Merge option sources, later sources overriding earlier ones key by key.

    Missing sources and keys set to None fall through to the earlier value.

    Examples:
        >>> resolve_options({"a": 1, "b": 2}, {"b": 3}, {})
        {'a': 1, 'b': 3}
        >>> resolve_options({"a": 1}, {"a": None})
        {'a': 1}
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if value is not None:
                merged[key] = value
    return merged
