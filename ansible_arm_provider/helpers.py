"""Shared helper functions and constants."""

from typing import Any

AUTH_OPTIONS = {
    "access_token": {
        "description": "A bearer token for the management API.",
        "required": False,
        "type": "str",
        "no_log": True,  # Sensitive information, do not log
    },
    "subscription_id": {
        "description": "The subscription the resource belongs to.",
        "required": False,
        "type": "str",
    },
    "base_url": {
        "description": "Base URL of the management API.",
        "required": False,
        "type": "str",
    },
    "api_timeout": {
        "description": "Timeout in seconds for a single HTTP request.",
        "required": False,
        "type": "int",
    },
    "profile": {
        "description": "Path to a YAML file with defaults for the options above.",
        "required": False,
        "type": "path",
    },
}

AUTH_FIXTURE = {
    "access_token": "eyJ0eXAiOiJKV1QiLCJhbGciOiJSUzI1NiJ9.dummy",
    "subscription_id": "00000000-0000-0000-0000-000000000000",
    "base_url": "https://management.azure.com",
    "api_timeout": 30,
    "profile": None,
}

WAITER_OPTIONS = {
    "state": {
        "description": "Should the resource be present or absent.",
        "choices": ["present", "absent"],
        "default": "present",
        "type": "str",
    },
    "wait": {
        "description": "Whether to wait until provisioning of the resource has finished.",
        "default": True,
        "type": "bool",
    },
    "timeout": {
        "description": "The maximum number of seconds to wait for provisioning to finish.",
        "default": 600,
        "type": "int",
    },
    "interval": {
        "description": "The interval in seconds for polling the provisioning state.",
        "default": 20,
        "type": "int",
    },
}


def get_nested(data: Any, dotted_path: str) -> Any:
    """Follows a dotted path ('properties.provisioningState') through nested dicts."""
    current = data
    for key in dotted_path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current
