"""
Field mapping for Logic App workflows (Microsoft.Logic/workflows).
"""

from ansible_arm_provider.fields import (
    get_field_string,
    get_location_field,
    get_tags_field,
    normalize_location,
    set_field_object,
    set_field_optional,
    set_location_field,
    set_name_and_group,
    set_sub_field_optional,
    set_tags_field,
)
from ansible_arm_provider.helpers import get_nested
from ansible_arm_provider.models import ResourceState, parse_resource_id
from ansible_arm_provider.plugins.crud.context import CrudRunnerContext

PROVIDER_PATH = "Microsoft.Logic/workflows"
API_VERSION = "2016-06-01"

DEFAULT_SCHEMA = "https://schema.management.azure.com/providers/Microsoft.Logic/schemas/2016-06-01/workflowdefinition.json"
DEFAULT_CONTENT_VERSION = "1.0.0.0"

STATE_FIELDS = ["name", "resource_group_name", "location", "tags", "definition"]


def expand_workflow(state: ResourceState) -> dict:
    return {
        "location": get_location_field(state),
        "tags": get_tags_field(state),
        "properties": {
            "definition": {
                "$schema": get_field_string(state, "definition.schema") or DEFAULT_SCHEMA,
                "contentVersion": get_field_string(state, "definition.content_version")
                or DEFAULT_CONTENT_VERSION,
                "parameters": {},
                "triggers": {},
                "actions": {},
                "outputs": {},
            }
        },
    }


def _set_definition(target: dict, definition):
    set_sub_field_optional(target, "schema", definition.get("$schema"))
    set_sub_field_optional(target, "content_version", definition.get("contentVersion"))


def flatten_workflow(state: ResourceState, workflow: dict):
    resource_id = parse_resource_id(workflow["id"])
    set_name_and_group(
        state,
        resource_id.path.get("workflows", workflow.get("name")),
        resource_id.resource_group,
    )
    set_location_field(state, workflow.get("location"))
    set_tags_field(state, workflow.get("tags"))

    definition = get_nested(workflow, "properties.definition") or {}
    set_field_object(state, "definition", definition, _set_definition)
    set_field_optional(
        state, "access_endpoint", get_nested(workflow, "properties.accessEndpoint")
    )


def runner_context() -> dict:
    return CrudRunnerContext(
        resource_type="logic app workflow",
        provider_path=PROVIDER_PATH,
        api_version=API_VERSION,
        expand=expand_workflow,
        flatten=flatten_workflow,
        state_fields=STATE_FIELDS,
        update_fields=["location", "tags", "definition"],
        normalizers={"location": normalize_location},
        wait_config={"state_field": "properties.provisioningState"},
    ).to_dict()
