from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Optional

from ansible_arm_provider.models import ResourceState


@dataclass
class CrudRunnerContext:
    # The user-friendly name of the resource, e.g., 'logic app workflow'. Used in messages.
    resource_type: str

    # Provider namespace and resource type, e.g. "Microsoft.Logic/workflows".
    provider_path: str

    api_version: str

    # Builds the request body from the resource state.
    expand: Callable[[ResourceState], Any]

    # Copies a response body into the resource state.
    flatten: Callable[[ResourceState, Any], None]

    # Module parameters copied into the resource state.
    state_fields: list[str] = field(
        default_factory=lambda: ["name", "resource_group_name"]
    )

    # Fields compared against the remote resource to decide whether to update.
    update_fields: list[str] = field(default_factory=list)

    # Per-field callables applied to both sides before comparing.
    normalizers: Dict[str, Callable[[Any], Any]] = field(default_factory=dict)

    mutation_operation: str = "create_or_update"

    # See `ansible_arm_provider.config.WaitConfig`; None disables waiting.
    wait_config: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Shallow conversion; callables are kept as-is."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
