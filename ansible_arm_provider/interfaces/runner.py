import json
import logging
import time
from urllib.parse import quote, urlencode

import yaml
from ansible.module_utils.basic import AnsibleModule
from ansible.module_utils.urls import fetch_url
from pydantic import ValidationError

from ansible_arm_provider.config import ProviderConfig, WaitConfig
from ansible_arm_provider.context import StopContext
from ansible_arm_provider.errors import ApiRequestError, ArmProviderError
from ansible_arm_provider.helpers import get_nested

logger = logging.getLogger(__name__)


class BaseRunner:
    """
    Abstract base class for all module runners.
    It handles common initialization tasks, such as building the provider
    configuration and the stop context, and owns the HTTP transport.
    """

    def __init__(self, module: AnsibleModule, context: dict):
        """
        Initializes the runner.

        Args:
            module: The AnsibleModule instance.
            context: A dictionary containing configuration and callables for the runner.
        """
        self.module = module
        self.context = context
        self.has_changed = False
        self.resource = None
        self.ctx = StopContext()
        self.config = self._load_config()

    def _load_config(self):
        try:
            return ProviderConfig.from_module_params(self.module.params)
        except ValidationError as e:
            self.module.fail_json(msg=f"Invalid provider configuration: {e}")
        except (OSError, yaml.YAMLError, ValueError) as e:
            self.module.fail_json(msg=f"Could not read provider profile: {e}")
        return None

    def run(self):
        """
        The main execution method for the runner.
        This method should be implemented by all subclasses.
        """
        raise NotImplementedError

    def send_request(
        self,
        method,
        path,
        data=None,
        query_params=None,
        path_params=None,
        ctx=None,
    ) -> tuple[any, int]:
        """
        A wrapper around fetch_url that returns `(body, status_code)`.

        Raises:
            ApiRequestError: on transport failures, non-2xx statuses and
                2xx responses whose body is not valid JSON.
            OperationCancelledError: if `ctx` has been stopped.
        """
        (ctx or self.ctx).raise_if_stopped()

        # 1. Handle path parameters safely
        if path_params:
            try:
                path = path.format(
                    **{k: quote(str(v), safe="") for k, v in path_params.items()}
                )
            except KeyError as e:
                raise ApiRequestError(
                    f"Missing required path parameter in API call: {e}"
                ) from e

        # 2. Build the final URL, handling both relative paths and absolute URLs.
        if path.startswith("http://") or path.startswith("https://"):
            url = path
        else:
            url = f"{self.config.base_url}/{path.lstrip('/')}"

        # 3. Safely encode and append query parameters
        if query_params:
            # Convert list values to repeated parameters
            encoded_params = []
            for key, value in query_params.items():
                if isinstance(value, list):
                    for v in value:
                        encoded_params.append((key, v))
                else:
                    encoded_params.append((key, value))
            url += "?" + urlencode(encoded_params)

        if data is not None and not isinstance(data, str):
            data = self.module.jsonify(data)

        logger.debug("%s %s", method, url)
        response, info = fetch_url(
            self.module,
            url,
            headers={
                "Authorization": f"Bearer {self.config.access_token}",
                "Content-Type": "application/json; charset=utf-8",
            },
            method=method,
            data=data,
            timeout=self.config.api_timeout,
        )

        body_content = None
        if response:
            body_content = response.read()
        elif info.get("body"):
            # fetch_url stores the error body in info for failed requests
            body_content = info["body"]

        status_code = info["status"]

        # 4. Handle failed requests with detailed error messages
        if status_code not in [200, 201, 202, 204]:
            error_details = ""
            error_body = None
            if body_content:
                try:
                    error_body = json.loads(body_content)
                    error_details = f"API Response: {json.dumps(error_body, indent=2)}"
                except json.JSONDecodeError:
                    error_body = body_content.decode(errors="ignore")
                    error_details = f"API Response (raw): {error_body}"

            raise ApiRequestError(
                f"Request to {url} failed. Status: {status_code}. "
                f"Message: {info.get('msg')}. {error_details}",
                status_code=status_code,
                body=error_body,
                context={"method": method},
            )

        # 5. Handle successful responses
        if not body_content:
            return None, status_code

        try:
            return json.loads(body_content), status_code
        except json.JSONDecodeError as e:
            raise ApiRequestError(
                f"API returned a success status ({status_code}) but the response was not valid JSON.",
                status_code=status_code,
                body=body_content.decode(errors="ignore"),
            ) from e

    def _wait_for_provisioning_state(self, client, group: str, name: str):
        """
        Polls a resource until its provisioning state is final (ok or erred).
        ARM accepts create-or-update requests for long-running resources before
        they are ready, so the state is read repeatedly from the resource body.
        """
        wait_config = self.context.get("wait_config")
        if wait_config is None:
            return
        if isinstance(wait_config, dict):
            wait_config = WaitConfig(**wait_config)

        timeout = self.module.params.get("timeout", 600)
        interval = self.module.params.get("interval", 20)
        start_time = time.time()

        while time.time() - start_time < timeout:
            resource = client.get(self.ctx, group, name)
            current_state = get_nested(resource, wait_config.state_field)

            if current_state is None or current_state in wait_config.ok_states:
                self.resource = resource
                return
            if current_state in wait_config.erred_states:
                self.module.fail_json(
                    msg=f"Resource provisioning resulted in an error state: '{current_state}'.",
                    resource=resource,
                )
                return

            logger.debug("%s is %s, waiting %s seconds", name, current_state, interval)
            if self.ctx.wait(interval):
                self.ctx.raise_if_stopped()

        self.module.fail_json(
            msg=f"Timeout waiting for resource {name} (resource group {group}) to become stable."
        )

    def _normalize_for_comparison(self, value: any) -> any:
        """
        Normalizes values so that user input and API responses compare equal
        when they describe the same thing. Lists are compared order-insensitively:
        lists of hashable values become sets, lists of dicts become sets of
        canonical JSON strings.
        """
        if isinstance(value, dict):
            return {k: self._normalize_for_comparison(v) for k, v in value.items()}

        if not isinstance(value, list):
            return value

        if not value:
            return set()

        if all(isinstance(item, dict) for item in value):
            return {
                json.dumps(item, sort_keys=True, separators=(",", ":"))
                for item in value
            }

        try:
            return set(value)
        except TypeError:
            # Mixed or unhashable content cannot be normalized; compare as-is.
            return value

    def fail_from_error(self, error: ArmProviderError):
        """Reports a provider error through Ansible and stops the module."""
        self.module.fail_json(msg=str(error))
