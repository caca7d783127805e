#!/usr/bin/python

DOCUMENTATION = r"""
---
module: logic_app_workflow_info
short_description: Get facts about a Logic App workflow.
options:
  name:
    description: Name of the workflow.
    required: true
    type: str
  resource_group_name:
    description: Name of the resource group the workflow belongs to.
    required: true
    type: str
"""

EXAMPLES = r"""
- name: Read a workflow
  logic_app_workflow_info:
    subscription_id: "{{ subscription_id }}"
    access_token: "{{ access_token }}"
    name: orders
    resource_group_name: rg-integration
  register: workflow
"""

RETURN = r"""
id:
  description: Resource id of the workflow.
  returned: success
  type: str
attributes:
  description: Flattened workflow attributes (location, tags, definition, access_endpoint).
  returned: success
  type: dict
"""

from ansible.module_utils.basic import AnsibleModule

from ansible_arm_provider.helpers import AUTH_OPTIONS
from ansible_arm_provider.plugins.facts.runner import FactsRunner
from ansible_arm_provider.resources.logic_app import runner_context

ARGUMENT_SPEC = {
    **AUTH_OPTIONS,
    "name": {"type": "str", "required": True},
    "resource_group_name": {"type": "str", "required": True},
}


def main():
    module = AnsibleModule(argument_spec=ARGUMENT_SPEC, supports_check_mode=True)
    runner = FactsRunner(module, runner_context())
    runner.run()


if __name__ == "__main__":
    main()
