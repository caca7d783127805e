from ansible_arm_provider.dispatcher import dispatch, extract_identifier
from ansible_arm_provider.errors import ArmProviderError, is_not_found
from ansible_arm_provider.interfaces.client import ArmResourceClient
from ansible_arm_provider.interfaces.runner import BaseRunner
from ansible_arm_provider.models import ResourceState, parse_resource_id


class CrudRunner(BaseRunner):
    """
    Handles the execution logic for a resource managed through a single
    create-or-update operation, a canonical read and a delete.

    The runner is configured by a `context` dictionary (see
    `CrudRunnerContext`): where the resource lives in the API, which module
    parameters make up its state, and the expand/flatten callables that map
    between that state and the API body. Creation and updates both go through
    the generic dispatcher.
    """

    def __init__(self, module, context):
        super().__init__(module, context)
        self.state = ResourceState.from_params(
            module.params, context.get("state_fields", ["name", "resource_group_name"])
        )
        self.client = self._build_client()

    def _build_client(self):
        client_factory = self.context.get("client_factory", ArmResourceClient)
        subscription_id = self.config.subscription_id if self.config else ""
        return client_factory(
            self.send_request,
            subscription_id,
            self.context["provider_path"],
            self.context["api_version"],
        )

    def run(self):
        """
        The main execution entrypoint for the runner. It orchestrates the entire
        module lifecycle based on the desired state and whether the resource
        currently exists.
        """
        try:
            # Step 1: Determine the current state of the resource.
            self.check_existence()

            # Step 2: If in check mode, predict changes without making them.
            if self.module.check_mode:
                self.handle_check_mode()
                return

            # Step 3: Execute actions based on current state and desired state.
            if self.resource:
                if self.module.params["state"] == "present":
                    self.update()
                elif self.module.params["state"] == "absent":
                    self.delete()
            elif self.module.params["state"] == "present":
                self.create()
        except ArmProviderError as e:
            self.fail_from_error(e)
            return

        # Step 4: Exit the module with the final state.
        self.exit()

    def _resolve_identity(self):
        """
        An explicit `id` parameter takes precedence over name and resource group.
        """
        resource_id = self.module.params.get("id")
        if not resource_id:
            return
        parsed = parse_resource_id(resource_id)
        type_key = self.context["provider_path"].rstrip("/").split("/")[-1]
        name = parsed.path.get(type_key)
        if name:
            self.state.set("name", name)
        self.state.set("resource_group_name", parsed.resource_group)

    def check_existence(self):
        """
        Reads the resource by resource group and name. A 404 means it does not exist.
        """
        self._resolve_identity()
        try:
            self.resource = self.client.get(self.ctx, self.state.group, self.state.name)
        except ArmProviderError as e:
            if not is_not_found(e):
                raise
            self.resource = None

        if self.resource:
            self.state.set_id(extract_identifier(self.resource))

    def create(self):
        """
        Expands the state into a request body and hands it to the dispatcher,
        which performs the create-or-update call and records the new id.
        """
        payload = self.context["expand"](self.state)
        dispatch(
            self.state,
            self.client,
            self.context.get("mutation_operation", "create_or_update"),
            payload,
            self.ctx,
        )
        self.has_changed = True

        if self.module.params.get("wait", True) and self.context.get("wait_config"):
            self._wait_for_provisioning_state(
                self.client, self.state.group, self.state.name
            )
        else:
            self.resource = self.client.get(
                self.ctx, self.state.group, self.state.name
            )

    def _current_state(self) -> ResourceState:
        """Flattens the remote resource into a state for comparison."""
        current = ResourceState(resource_id=extract_identifier(self.resource))
        self.context["flatten"](current, self.resource)
        return current

    def _detect_changes(self) -> list[str]:
        """
        Returns the names of the updatable fields whose desired value differs
        from the remote one. Fields the user did not set are ignored.
        """
        current = self._current_state()
        normalizers = self.context.get("normalizers", {})
        changed = []
        for field in self.context.get("update_fields", []):
            desired = self.state.get(field)
            if desired is None:
                continue
            existing = current.get(field)
            normalize = normalizers.get(field)
            if normalize:
                desired, existing = normalize(desired), normalize(existing)
            if self._normalize_for_comparison(
                desired
            ) != self._normalize_for_comparison(existing):
                changed.append(field)
        return changed

    def update(self):
        """
        ARM create-or-update is a full PUT, so any drift in an updatable field
        is resolved by dispatching the whole expanded body again.
        """
        if not self.resource:
            return
        if self._detect_changes():
            self.create()

    def delete(self):
        """
        Deletes the resource by sending a DELETE request to its endpoint.
        """
        if self.resource:
            self.client.delete(self.ctx, self.state.group, self.state.name)
            self.has_changed = True
            self.resource = None
            self.state.set_id("")

    def handle_check_mode(self):
        """
        Predicts changes for Ansible's --check mode without making any mutating calls.
        """
        state = self.module.params["state"]
        if state == "present" and not self.resource:
            self.has_changed = True
        elif state == "absent" and self.resource:
            self.has_changed = True
        elif state == "present" and self.resource:
            self.has_changed = bool(self._detect_changes())

        self.exit()

    def exit(self):
        """
        Formats the final response and exits the module execution.
        """
        self.module.exit_json(
            changed=self.has_changed, id=self.state.id or None, resource=self.resource
        )
