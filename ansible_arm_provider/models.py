"""
This module defines the core data structures shared by the dispatcher, the
resource clients and the runners.

`ResourceState` is the mutable record of one managed resource: its identity
fields, the remote identifier once known, and every other attribute mapped
from the Ansible parameters or flattened from the API response.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ansible_arm_provider.errors import InvalidResourceIdError

NAME_FIELD = "name"
GROUP_FIELD = "resource_group_name"


def is_zero_value(value: Any) -> bool:
    """True for None, empty strings and collections, zero numbers and False."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return not value
    return False


class ResourceState:
    """
    A named-field key/value container representing one resource instance.

    The remote identifier is kept apart from the ordinary fields, so that
    writing it can never clobber configuration values and vice versa.
    """

    def __init__(self, fields: Optional[Dict[str, Any]] = None, resource_id: str = ""):
        self._fields: Dict[str, Any] = dict(fields or {})
        self._id = resource_id or ""

    @classmethod
    def from_params(cls, params: Dict[str, Any], keys) -> "ResourceState":
        """Builds a state from the subset of module parameters named in `keys`."""
        return cls({key: params.get(key) for key in keys if key in params})

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, resource_id: Optional[str]):
        self._id = resource_id or ""

    @property
    def name(self) -> str:
        return self._fields.get(NAME_FIELD) or ""

    @property
    def group(self) -> str:
        return self._fields.get(GROUP_FIELD) or ""

    def get(self, key: str, default: Any = None) -> Any:
        return self._fields.get(key, default)

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """Returns the value of `key` and whether it is set to a non-zero value."""
        value = self._fields.get(key)
        return value, not is_zero_value(value)

    def set(self, key: str, value: Any):
        self._fields[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._fields)

    def __contains__(self, key: str) -> bool:
        return key in self._fields

    def __repr__(self) -> str:
        return f"ResourceState(id={self._id!r}, fields={self._fields!r})"


@dataclass(frozen=True)
class ResourceId:
    """
    The parsed form of an ARM resource id, e.g.
    /subscriptions/{sub}/resourceGroups/{rg}/providers/Microsoft.Logic/workflows/{name}
    """

    subscription_id: str
    resource_group: str
    provider: str = ""
    # Remaining key/value segments after the provider, e.g. {"workflows": "wf1"}
    path: Dict[str, str] = field(default_factory=dict)


def parse_resource_id(resource_id: str) -> ResourceId:
    """
    Splits an ARM resource id into its components.

    Raises:
        InvalidResourceIdError: if the id is not an absolute, even-length
            sequence of key/value segments with a subscription and a resource group.
    """
    if not resource_id or not resource_id.startswith("/"):
        raise InvalidResourceIdError(
            "Resource id must be an absolute path", {"id": resource_id}
        )

    components = resource_id.strip("/").split("/")
    if len(components) % 2 != 0 or any(not c for c in components):
        raise InvalidResourceIdError(
            "Resource id has an odd number of segments", {"id": resource_id}
        )

    subscription_id = ""
    resource_group = ""
    provider = ""
    path: Dict[str, str] = {}

    for key, value in zip(components[0::2], components[1::2]):
        lowered = key.lower()
        if lowered == "subscriptions" and not subscription_id:
            subscription_id = value
        elif lowered == "resourcegroups" and not resource_group:
            resource_group = value
        elif lowered == "providers" and not provider:
            provider = value
        else:
            path[key] = value

    if not subscription_id:
        raise InvalidResourceIdError(
            "No subscription id found in resource id", {"id": resource_id}
        )
    if not resource_group:
        raise InvalidResourceIdError(
            "No resource group found in resource id", {"id": resource_id}
        )

    return ResourceId(
        subscription_id=subscription_id,
        resource_group=resource_group,
        provider=provider,
        path=path,
    )
