import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from ansible_arm_provider.errors import (
    ApiRequestError,
    UnknownOperationError,
    is_not_found,
)

logger = logging.getLogger(__name__)

# Prefix shared by every resource that lives directly under a resource group.
RESOURCE_GROUP_PATH = "/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"


class ResourceClient(ABC):
    """
    The capability set the dispatcher relies on: a canonical `get` plus a
    declared family of mutation operations.

    Every mutation listed in `mutation_operations` must be a method accepting
    `(ctx, group, name, params)` and returning the remote resource.
    """

    mutation_operations: tuple[str, ...] = ()

    @abstractmethod
    def get(self, ctx, group: str, name: str) -> Any:
        """Fetches the resource `name` in `group`."""

    def mutation(self, operation_name: str) -> Callable[..., Any]:
        """
        Resolves a declared mutation operation to its bound method.

        Raises:
            UnknownOperationError: if the operation is not declared or not implemented.
        """
        if operation_name not in self.mutation_operations:
            raise UnknownOperationError(
                f"Operation '{operation_name}' is not a declared mutation of "
                f"{type(self).__name__}",
                {"declared": ", ".join(self.mutation_operations) or "none"},
            )
        method = getattr(self, operation_name, None)
        if not callable(method):
            raise UnknownOperationError(
                f"{type(self).__name__} declares '{operation_name}' but does not implement it"
            )
        return method


class ArmResourceClient(ResourceClient):
    """
    A generic client for ARM resources addressed by subscription, resource
    group, provider path and name.

    Args:
        send_request: The transport, normally `BaseRunner.send_request`.
        subscription_id: The subscription all requests are scoped to.
        provider_path: e.g. "Microsoft.Logic/workflows".
        api_version: The `api-version` query parameter sent with every request.
    """

    mutation_operations = ("create_or_update", "update")

    def __init__(
        self,
        send_request: Callable[..., Any],
        subscription_id: str,
        provider_path: str,
        api_version: str,
    ):
        self.send_request = send_request
        self.subscription_id = subscription_id
        self.provider_path = provider_path
        self.api_version = api_version
        self.path = f"{RESOURCE_GROUP_PATH}/providers/{provider_path.strip('/')}/{{name}}"

    def _path_params(self, group: str, name: str) -> dict:
        return {
            "subscriptionId": self.subscription_id,
            "resourceGroupName": group,
            "name": name,
        }

    def _call(self, ctx, method: str, group: str, name: str, data=None):
        body, _ = self.send_request(
            method,
            self.path,
            data=data,
            query_params={"api-version": self.api_version},
            path_params=self._path_params(group, name),
            ctx=ctx,
        )
        return body

    def create_or_update(self, ctx, group: str, name: str, params: dict) -> Any:
        return self._call(ctx, "PUT", group, name, data=params)

    def update(self, ctx, group: str, name: str, params: dict) -> Any:
        return self._call(ctx, "PATCH", group, name, data=params)

    def get(self, ctx, group: str, name: str) -> Any:
        return self._call(ctx, "GET", group, name)

    def delete(self, ctx, group: str, name: str) -> bool:
        """Deletes the resource. Returns False if it was already gone."""
        try:
            self._call(ctx, "DELETE", group, name)
        except ApiRequestError as e:
            if is_not_found(e):
                logger.info(
                    "%s %s (resource group %s) was already deleted",
                    self.provider_path,
                    name,
                    group,
                )
                return False
            raise
        return True
