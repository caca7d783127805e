"""
Write-then-confirm dispatch of create-or-update calls.

Resource types differ only in the name of their mutation operation and the
shape of its payload, so one function serves all of them: it invokes the
named mutation, reads the resource back with the client's canonical `get`,
and records the returned identifier on the resource state.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from ansible_arm_provider.errors import (
    FetchAfterMutationError,
    InvalidStateError,
    MissingIdentifierError,
    MutationError,
)
from ansible_arm_provider.interfaces.client import ResourceClient
from ansible_arm_provider.models import ResourceState

logger = logging.getLogger(__name__)


def extract_identifier(resource: Any) -> Optional[str]:
    """Returns the `id` of a fetched resource, whether it is a mapping or an object."""
    if resource is None:
        return None
    if isinstance(resource, Mapping):
        return resource.get("id")
    return getattr(resource, "id", None)


def dispatch(
    state: ResourceState,
    client: ResourceClient,
    operation_name: str,
    params: Any,
    ctx=None,
) -> str:
    """
    Performs the mutation `operation_name` followed by a confirmatory fetch, and
    writes the fetched identifier into `state`.

    At most one mutation and one fetch are issued, strictly in that order, and
    nothing is retried. The identifier is the only field of `state` ever written,
    and only when both calls succeed with a non-empty identifier.

    Args:
        state: Resource state holding non-empty `name` and `resource_group_name`.
        client: The resource type's client.
        operation_name: A mutation declared by `client`, e.g. "create_or_update".
        params: Request payload, forwarded verbatim.
        ctx: Stop context forwarded to both calls.

    Returns:
        The identifier written into `state`.

    Raises:
        InvalidStateError: `name` or `resource_group_name` is empty.
        UnknownOperationError: the client does not offer `operation_name`.
        MutationError: the mutation call failed.
        FetchAfterMutationError: the mutation succeeded but the fetch failed.
        MissingIdentifierError: the fetch returned no identifier.
    """
    name = state.name
    group = state.group
    details = {"name": name, "group": group, "operation": operation_name}

    if not name or not group:
        raise InvalidStateError(
            "Resource state must define both a name and a resource group", details
        )

    mutate = client.mutation(operation_name)

    logger.debug("Calling %s for %r (resource group %r)", operation_name, name, group)
    try:
        mutate(ctx, group, name, params)
    except Exception as e:
        raise MutationError(f"{operation_name} failed: {e}", details) from e

    try:
        resource = client.get(ctx, group, name)
    except Exception as e:
        raise FetchAfterMutationError(
            f"Reading the resource back after {operation_name} failed: {e}", details
        ) from e

    resource_id = extract_identifier(resource)
    if not resource_id:
        raise MissingIdentifierError(
            f'Cannot read the ID of name="{name}" (group="{group}") '
            f"after {operation_name}",
            details,
        )

    state.set_id(resource_id)
    logger.info(
        "%s %r (resource group %r) has id %s", operation_name, name, group, resource_id
    )
    return resource_id
