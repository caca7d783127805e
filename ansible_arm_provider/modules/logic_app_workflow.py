#!/usr/bin/python

DOCUMENTATION = r"""
---
module: logic_app_workflow
short_description: Manage Logic App workflows.
description:
  - Create, update or delete a Logic App workflow in a resource group.
  - Creation and updates use a single create-or-update call followed by a read.
options:
  name:
    description: Name of the workflow.
    required: true
    type: str
  resource_group_name:
    description: Name of the resource group the workflow belongs to.
    required: true
    type: str
  id:
    description:
      - Full resource id of an existing workflow.
      - Takes precedence over I(name) and I(resource_group_name) for lookup.
    type: str
  location:
    description: Azure region of the workflow. Required when creating.
    type: str
  tags:
    description: Resource tags.
    type: dict
  definition:
    description: Workflow definition header.
    type: dict
    suboptions:
      schema:
        description: JSON schema URL of the workflow definition language.
        type: str
        default: https://schema.management.azure.com/providers/Microsoft.Logic/schemas/2016-06-01/workflowdefinition.json
      content_version:
        description: Version of the workflow definition content.
        type: str
        default: 1.0.0.0
"""

EXAMPLES = r"""
- name: Create a workflow
  logic_app_workflow:
    subscription_id: "{{ subscription_id }}"
    access_token: "{{ access_token }}"
    name: orders
    resource_group_name: rg-integration
    location: West Europe
    tags:
      env: prod

- name: Remove a workflow
  logic_app_workflow:
    subscription_id: "{{ subscription_id }}"
    access_token: "{{ access_token }}"
    name: orders
    resource_group_name: rg-integration
    state: absent
"""

RETURN = r"""
id:
  description: Resource id of the workflow.
  returned: when the workflow exists
  type: str
resource:
  description: The workflow as returned by the management API.
  returned: when the workflow exists
  type: dict
"""

from ansible.module_utils.basic import AnsibleModule

from ansible_arm_provider.helpers import AUTH_OPTIONS, WAITER_OPTIONS
from ansible_arm_provider.plugins.crud.runner import CrudRunner
from ansible_arm_provider.resources.logic_app import (
    DEFAULT_CONTENT_VERSION,
    DEFAULT_SCHEMA,
    runner_context,
)

ARGUMENT_SPEC = {
    **AUTH_OPTIONS,
    **WAITER_OPTIONS,
    "name": {"type": "str", "required": True},
    "resource_group_name": {"type": "str", "required": True},
    "id": {"type": "str"},
    "location": {"type": "str"},
    "tags": {"type": "dict"},
    "definition": {
        "type": "dict",
        "apply_defaults": True,
        "options": {
            "schema": {"type": "str", "default": DEFAULT_SCHEMA},
            "content_version": {"type": "str", "default": DEFAULT_CONTENT_VERSION},
        },
    },
}


def main():
    module = AnsibleModule(
        argument_spec=ARGUMENT_SPEC,
        supports_check_mode=True,
        required_if=[("state", "present", ("location",), False)],
    )
    runner = CrudRunner(module, runner_context())
    runner.run()


if __name__ == "__main__":
    main()
