"""Single-or-list normalization for converter output."""

from typing import Any, Sequence


def normalize(value: Any) -> Sequence[Any]:
    """Turn "nothing, one item or many items" into an ordered sequence.

    The tree converter stores a tag as a single node when it occurs once and
    as a list when it repeats. Every mapper iterating a repeatable element
    goes through this function instead of checking the shape itself.

    Args:
        value: ``None``, a single item, or a list/tuple of items

    Returns:
        ``[]`` for ``None``, the value itself for a list or tuple,
        otherwise a one-element list

    Examples:
        >>> normalize(None)
        []
        >>> normalize("a")
        ['a']
        >>> items = ["a", "b"]
        >>> normalize(items) is items
        True
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return value
    return [value]


__all__ = ["normalize"]
