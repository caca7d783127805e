"""
Helpers for mapping between the flat module parameters held in a
`ResourceState` and the nested bodies of the management API.

"expand" helpers read from the state to build request payloads, "set" helpers
flatten response values back into the state.
"""

from typing import Any, Callable, Dict, Optional

from ansible_arm_provider.models import (
    GROUP_FIELD,
    NAME_FIELD,
    ResourceState,
    is_zero_value,
)


def normalize_location(location: Optional[str]) -> str:
    """'West Europe' and 'westeurope' name the same region."""
    return (location or "").replace(" ", "").lower()


def get_path(state: ResourceState, path: str) -> Any:
    """
    Reads a value by a dotted path whose numeric segments index into lists,
    e.g. "access_policies.0.object_id".
    """
    first, _, rest = path.partition(".")
    current = state.get(first)
    if not rest:
        return current
    for key in rest.split("."):
        if isinstance(current, list):
            try:
                current = current[int(key)]
            except (ValueError, IndexError):
                return None
        elif isinstance(current, dict):
            current = current.get(key)
        else:
            return None
    return current


def get_field_string(state: ResourceState, path: str) -> str:
    value = get_path(state, path)
    return "" if value is None else str(value)


def get_location_field(state: ResourceState) -> str:
    return normalize_location(state.get("location"))


def get_tags_field(state: ResourceState) -> Dict[str, str]:
    tags = state.get("tags") or {}
    return {str(k): "" if v is None else str(v) for k, v in tags.items()}


def set_name_and_group(state: ResourceState, name: str, group: str):
    state.set(NAME_FIELD, name)
    state.set(GROUP_FIELD, group)


def set_location_field(state: ResourceState, location: Optional[str]):
    if location is not None:
        state.set("location", normalize_location(location))


def set_tags_field(state: ResourceState, tags: Optional[Dict[str, Any]]):
    state.set("tags", dict(tags or {}))


def set_field_optional(state: ResourceState, field: str, value: Any):
    """Writes `value` unless it is a zero value, leaving any previous value in place."""
    if not is_zero_value(value):
        state.set(field, value)


def set_sub_field_optional(target: Dict[str, Any], field: str, value: Any):
    if not is_zero_value(value):
        target[field] = value


def set_field_object(
    state: ResourceState,
    field: str,
    value: Any,
    set_children: Callable[[Dict[str, Any], Any], None],
):
    """
    Flattens a nested object into a sub-options dict. `set_children` copies
    the wanted keys of `value` into the dict it is given.
    """
    output: Dict[str, Any] = {}
    set_children(output, value)
    state.set(field, output)
