from ansible_arm_provider.dispatcher import extract_identifier
from ansible_arm_provider.errors import ArmProviderError, is_not_found
from ansible_arm_provider.interfaces.client import ArmResourceClient
from ansible_arm_provider.interfaces.runner import BaseRunner
from ansible_arm_provider.models import ResourceState


class FactsRunner(BaseRunner):
    """
    Read-only counterpart of `CrudRunner`: fetches one resource by resource
    group and name and returns its flattened attributes. Never changes anything.
    """

    def run(self):
        name = self.module.params["name"]
        group = self.module.params["resource_group_name"]

        client_factory = self.context.get("client_factory", ArmResourceClient)
        client = client_factory(
            self.send_request,
            self.config.subscription_id if self.config else "",
            self.context["provider_path"],
            self.context["api_version"],
        )

        try:
            resource = client.get(self.ctx, group, name)
        except ArmProviderError as e:
            if is_not_found(e):
                self.module.fail_json(
                    msg=f"{self.context['resource_type'].capitalize()} '{name}' "
                    f"(resource group '{group}') was not found."
                )
                return
            self.fail_from_error(e)
            return

        state = ResourceState(resource_id=extract_identifier(resource))
        self.context["flatten"](state, resource)
        self.resource = resource

        self.module.exit_json(
            changed=False, id=state.id or None, attributes=state.to_dict()
        )
