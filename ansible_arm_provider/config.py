from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://management.azure.com"

# Module parameters that may also come from a profile file.
PROFILE_KEYS = ("subscription_id", "access_token", "base_url", "api_timeout")


class ProviderConfig(BaseModel):
    """
    Connection settings for one module run. Built once by the runner and
    passed explicitly to everything that talks to the remote API.
    """

    subscription_id: str
    access_token: str = Field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    # Seconds before a single HTTP request is abandoned.
    api_timeout: int = 30

    @field_validator("base_url")
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @classmethod
    def from_module_params(cls, params: Dict[str, Any]) -> "ProviderConfig":
        """
        Builds the configuration from Ansible module parameters. Values found in
        the optional `profile` file fill in any parameter the user left unset.
        """
        values: Dict[str, Any] = {}
        profile_path = params.get("profile")
        if profile_path:
            values.update(load_profile(profile_path))

        for key in PROFILE_KEYS:
            if params.get(key) is not None:
                values[key] = params[key]

        return cls(**values)


class WaitConfig(BaseModel):
    """Describes how to recognise the end of an asynchronous provisioning."""

    # Dotted path into the resource body.
    state_field: str = "properties.provisioningState"
    ok_states: List[str] = Field(default_factory=lambda: ["Succeeded"])
    erred_states: List[str] = Field(default_factory=lambda: ["Failed", "Canceled"])


def load_profile(path: str) -> Dict[str, Any]:
    """
    Reads a YAML profile file holding provider settings, e.g.

        subscription_id: 00000000-0000-0000-0000-000000000000
        base_url: https://management.usgovcloudapi.net

    Unknown keys are ignored.
    """
    with open(path, "r") as f:
        data: Optional[Dict[str, Any]] = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile file '{path}' must contain a mapping")
    return {key: data[key] for key in PROFILE_KEYS if data.get(key) is not None}
