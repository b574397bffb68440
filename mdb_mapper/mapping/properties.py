"""
Property access helpers used by the property mapper.

Sources and targets may be mappings (documents) or plain objects
(entities). Mappings are read and written by item, objects by attribute,
so property setters on richer targets run as usual.
"""

import dataclasses
from collections.abc import Mapping, MutableMapping
from typing import Any

from .absent import ABSENT


def prop(name: str, prefix: str = "") -> str:
    """Return ``name`` prefixed by ``prefix``."""
    return f"{prefix}{name}"


def read_field(source: Any, name: str) -> Any:
    """Return the named field of ``source``, or ABSENT if it has none."""
    if source is None:
        return ABSENT
    if isinstance(source, Mapping):
        return source.get(name, ABSENT)
    return getattr(source, name, ABSENT)


def write_field(target: Any, name: str, value: Any) -> None:
    """Set the named field of ``target``, going through its setters."""
    if isinstance(target, MutableMapping):
        target[name] = value
    else:
        setattr(target, name, value)


def own_field_names(source: Any) -> list[str]:
    """
    Return the names of the fields an object carries itself.

    Mapping keys for mappings; instance state for objects (``__dict__``
    entries, then any populated ``__slots__``). Class attributes, properties
    and methods are not included.
    """
    if source is None:
        return []
    if isinstance(source, Mapping):
        return list(source.keys())
    if dataclasses.is_dataclass(source) and not hasattr(source, "__dict__"):
        return [f.name for f in dataclasses.fields(source)]

    names = list(vars(source)) if hasattr(source, "__dict__") else []
    for cls in type(source).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if not slot.startswith("__") and slot not in names:
                if hasattr(source, slot):
                    names.append(slot)
    return names


def get_largest_list_among(*lists: list[Any] | None) -> list[Any] | None:
    """
    Return the longest of the given lists.

    ``None`` entries are ignored; on a tie the earlier list wins. Returns
    ``None`` when no list is given.
    """
    largest = None
    for it in lists:
        if it is None:
            continue
        if largest is None or len(it) > len(largest):
            largest = it
    return largest


def grow_all_lists_to_largest_among(*lists: list[Any] | None) -> None:
    """
    Pad every given list in place to the length of the longest one.

    New elements are ABSENT placeholders; existing elements are never
    removed. ``None`` entries are skipped.
    """
    largest = get_largest_list_among(*lists)
    if not largest:
        return
    length = len(largest)
    for it in lists:
        if it is not None and len(it) < length:
            it.extend([ABSENT] * (length - len(it)))
