import json
from unittest.mock import MagicMock, patch
from urllib.parse import urlsplit

import pytest

from ansible_arm_provider.helpers import AUTH_FIXTURE


def run_module_harness(ansible_module, module_params, check_mode=False):
    """
    A generic test harness for running any of the provider's Ansible modules.

    Args:
        ansible_module: The imported module object (e.g., logic_app_workflow).
        module_params (dict): A dictionary of parameters to simulate user input.

    Returns:
        A tuple containing the results from exit_json and fail_json.
    """
    results = {"exit_json": None, "fail_json": None}

    # Patch AnsibleModule within the specific module's namespace
    with patch.object(ansible_module, "AnsibleModule") as mock_ansible_module_class:
        mock_module_instance = MagicMock()
        mock_module_instance.params = module_params
        mock_module_instance.check_mode = check_mode
        mock_module_instance.exit_json.side_effect = lambda **kwargs: results.update(
            exit_json=kwargs
        )
        mock_module_instance.fail_json.side_effect = lambda **kwargs: results.update(
            fail_json=kwargs
        )
        # Add jsonify, as it's called by the runner to prepare request bodies
        mock_module_instance.jsonify = json.dumps

        mock_ansible_module_class.return_value = mock_module_instance

        ansible_module.main()

    return results["exit_json"], results["fail_json"]


class FakeArmApi:
    """
    An in-memory stand-in for the management API, served through a patched
    `fetch_url`. PUT stores the body (adding id, name and a provisioning
    state), GET returns it, DELETE removes it.
    """

    def __init__(self):
        self.resources = {}
        self.requests = []
        # Status code to answer the next PUT with, instead of storing the body.
        self.fail_next_put = None

    @staticmethod
    def _response(status, body=None, msg="OK"):
        content = json.dumps(body).encode() if body is not None else b""
        if status >= 400:
            return None, {"status": status, "msg": msg, "body": content}
        response = MagicMock()
        response.read.return_value = content
        return response, {"status": status, "msg": msg}

    def __call__(self, module, url, headers=None, method="GET", data=None, timeout=None):
        path = urlsplit(url).path
        self.requests.append((method, path, json.loads(data) if data else None))

        if method == "PUT":
            if self.fail_next_put:
                status, self.fail_next_put = self.fail_next_put, None
                return self._response(
                    status, {"error": {"message": "quota exceeded"}}, "Conflict"
                )
            body = json.loads(data)
            body["id"] = path
            body["name"] = path.rsplit("/", 1)[-1]
            body.setdefault("properties", {})["provisioningState"] = "Succeeded"
            created = path not in self.resources
            self.resources[path] = body
            return self._response(201 if created else 200, body)

        if path not in self.resources:
            return self._response(
                404, {"error": {"code": "ResourceNotFound"}}, "Not Found"
            )

        if method == "DELETE":
            del self.resources[path]
            return self._response(200)

        return self._response(200, self.resources[path])

    def methods(self):
        return [method for method, _, _ in self.requests]


@pytest.fixture
def fake_api():
    api = FakeArmApi()
    with patch("ansible_arm_provider.interfaces.runner.fetch_url", side_effect=api):
        yield api


@pytest.fixture
def auth_params():
    """Provides a dictionary with standard authentication and endpoint parameters."""
    return dict(AUTH_FIXTURE)


@pytest.fixture
def module_harness():
    return run_module_harness
