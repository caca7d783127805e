import json
from unittest.mock import MagicMock, patch

import pytest

from ansible_arm_provider.helpers import AUTH_FIXTURE


@pytest.fixture
def mock_ansible_module():
    """
    A pytest fixture that provides a mocked AnsibleModule instance for each test.
    This prevents tests from interfering with each other and from exiting the test runner.
    """
    with patch("ansible_arm_provider.interfaces.runner.AnsibleModule") as mock_class:
        mock_module = mock_class.return_value
        mock_module.params = {**AUTH_FIXTURE}
        mock_module.check_mode = False
        mock_module.jsonify = json.dumps

        # Mock the exit methods to prevent sys.exit and to capture their arguments
        mock_module.exit_json = MagicMock()
        mock_module.fail_json = MagicMock()
        mock_module.warn = MagicMock()

        yield mock_module
