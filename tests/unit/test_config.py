import pytest
from pydantic import ValidationError

from ansible_arm_provider.config import (
    DEFAULT_BASE_URL,
    ProviderConfig,
    WaitConfig,
    load_profile,
)
from ansible_arm_provider.helpers import AUTH_FIXTURE


class TestProviderConfig:
    def test_from_module_params(self):
        config = ProviderConfig.from_module_params(
            {**AUTH_FIXTURE, "base_url": "https://management.example.com/"}
        )

        assert config.subscription_id == AUTH_FIXTURE["subscription_id"]
        assert config.access_token == AUTH_FIXTURE["access_token"]
        assert config.base_url == "https://management.example.com"
        assert config.api_timeout == 30

    def test_defaults(self):
        config = ProviderConfig.from_module_params(
            {"subscription_id": "s", "access_token": "t", "base_url": None}
        )

        assert config.base_url == DEFAULT_BASE_URL

    def test_token_is_not_in_repr(self):
        config = ProviderConfig(subscription_id="s", access_token="very-secret")
        assert "very-secret" not in repr(config)

    def test_missing_subscription(self):
        with pytest.raises(ValidationError):
            ProviderConfig.from_module_params({"access_token": "t"})

    def test_profile_fills_unset_params(self, tmp_path):
        profile = tmp_path / "profile.yaml"
        profile.write_text(
            "subscription_id: from-profile\n"
            "access_token: profile-token\n"
            "base_url: https://management.usgovcloudapi.net\n"
            "unrelated: ignored\n"
        )

        config = ProviderConfig.from_module_params(
            {"profile": str(profile), "access_token": "explicit-token"}
        )

        assert config.subscription_id == "from-profile"
        assert config.access_token == "explicit-token"
        assert config.base_url == "https://management.usgovcloudapi.net"


class TestLoadProfile:
    def test_empty_file(self, tmp_path):
        profile = tmp_path / "empty.yaml"
        profile.write_text("")
        assert load_profile(str(profile)) == {}

    def test_non_mapping(self, tmp_path):
        profile = tmp_path / "list.yaml"
        profile.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_profile(str(profile))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_profile(str(tmp_path / "nope.yaml"))


def test_wait_config_defaults():
    config = WaitConfig()

    assert config.state_field == "properties.provisioningState"
    assert config.ok_states == ["Succeeded"]
    assert config.erred_states == ["Failed", "Canceled"]
