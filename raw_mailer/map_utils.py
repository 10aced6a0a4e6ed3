"""Helpers for working with mappings and plain objects."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class KeyValue:
    key: str
    value: Any


def _property(item: Any, prop_name: str) -> Any:
    if item is None:
        return None
    if isinstance(item, dict):
        return item.get(prop_name)
    return getattr(item, prop_name, None)


def map_by_unique_property(items: Sequence[Any], prop_name: str) -> Dict[Any, Any]:
    """Index ``items`` by ``prop_name``; every item needs a distinct value."""
    if items is None or not prop_name:
        raise ValueError("Neither input nor prop_name can be empty")

    rval: Dict[Any, Any] = {}
    for item in items:
        value = _property(item, prop_name)
        if value is None:
            raise ValueError(f"No value for {prop_name} found in {item!r}")
        if value in rval:
            raise ValueError(f"Multiple values found for {value!r}")
        rval[value] = item
    return rval


def group_by_property(items: Sequence[Any], prop_name: str) -> Dict[Any, List[Any]]:
    if items is None or not prop_name:
        raise ValueError("Neither input nor prop_name can be empty")

    rval: Dict[Any, List[Any]] = {}
    for item in items:
        value = _property(item, prop_name)
        if value is None:
            raise ValueError(f"No value for {prop_name} found in {item!r}")
        rval.setdefault(value, []).append(item)
    return rval


def find_value(to_search: Any, path: Optional[Sequence[str]]) -> Any:
    """Walk ``path`` through nested mappings; ``None`` once a step is missing."""
    current = to_search
    for step in path or []:
        if not current:
            return None
        current = _property(current, step)
    return current


def find_value_dot_path(to_search: Any, dot_path: Optional[str]) -> Any:
    if not dot_path:
        return to_search
    if not to_search:
        return None
    return find_value(to_search, dot_path.split("."))


def simple_deep_compare(object1: Any, object2: Any) -> bool:
    """Compare two values through their JSON serialisation.

    Slow and order sensitive for dict keys, but simple.
    """
    if object1 is None and object2 is None:
        return True
    if object1 is None or object2 is None:
        return False
    return json.dumps(object1, default=str) == json.dumps(object2, default=str)


def to_key_value_list(value: Dict[str, Any]) -> List[KeyValue]:
    return [KeyValue(key=k, value=v) for k, v in value.items()]


def from_key_value_list(items: Iterable[KeyValue]) -> Dict[str, Any]:
    return {item.key: item.value for item in items}


def cleanup(
    obj: Any,
    strip_zero: bool = False,
    strip_null: bool = True,
    strip_undefined: bool = True,
    strip_empty_string: bool = True,
) -> Any:
    """Return a deep copy of ``obj`` with empty values removed from every dict.

    Mainly used before writing documents to stores that reject empty
    attributes. The flags apply to the top level only; nested dicts and lists
    are cleaned with the default flags. List items are cleaned but never
    removed. ``strip_undefined`` is accepted for signature parity; Python has
    no separate undefined value.
    """
    if isinstance(obj, list):
        return [cleanup(item) for item in obj]
    if not isinstance(obj, dict):
        return obj

    rval: Dict[Any, Any] = {}
    for key, value in copy.deepcopy(obj).items():
        if isinstance(value, (dict, list)):
            rval[key] = cleanup(value)
        elif value is None and strip_null:
            continue
        elif value == "" and strip_empty_string:
            continue
        elif strip_zero and value == 0 and not isinstance(value, bool):
            continue
        else:
            rval[key] = value
    return rval


def extract_value_from_map_ignore_case(src: Optional[Dict[str, Any]], key: Optional[str]) -> Any:
    """Return the value whose key matches ``key`` case-insensitively (last match wins)."""
    rval = None
    if src and key:
        finder = key.lower()
        for name, value in src.items():
            if name.lower() == finder:
                if rval:
                    logger.warning("Multiple entries found for %s (replacing %s with %s)", key, rval, value)
                rval = value
    return rval


def safe_call_function(ob: Any, fn_name: str) -> bool:
    """Call ``ob.<fn_name>()`` if it exists; return whether it ran without error."""
    fn = getattr(ob, fn_name, None) if ob is not None and fn_name else None
    if not callable(fn):
        return False
    try:
        fn()
    except Exception as exc:
        logger.warning("Error calling %s on %r: %s", fn_name, ob, exc)
        return False
    return True


def case_insensitive_access(ob: Optional[Dict[str, Any]], key_name: Optional[str]) -> Any:
    if not ob or not key_name:
        return None
    rval = ob.get(key_name)
    if not rval:
        wanted = key_name.lower()
        match = next((name for name in ob if name.lower() == wanted), None)
        if match is not None:
            rval = ob[match]
    return rval


__all__ = [
    "KeyValue",
    "case_insensitive_access",
    "cleanup",
    "extract_value_from_map_ignore_case",
    "find_value",
    "find_value_dot_path",
    "from_key_value_list",
    "group_by_property",
    "map_by_unique_property",
    "safe_call_function",
    "simple_deep_compare",
    "to_key_value_list",
]
