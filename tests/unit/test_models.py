"""Tests for the models module."""

import pytest

from ansible_arm_provider.errors import InvalidResourceIdError
from ansible_arm_provider.models import (
    ResourceId,
    ResourceState,
    is_zero_value,
    parse_resource_id,
)


class TestResourceState:
    """Test suite for the ResourceState container."""

    def test_from_params_keeps_only_listed_keys(self):
        state = ResourceState.from_params(
            {"name": "wf", "resource_group_name": "rg", "access_token": "secret"},
            ["name", "resource_group_name", "location"],
        )

        assert state.to_dict() == {"name": "wf", "resource_group_name": "rg"}
        assert "location" not in state

    def test_identity_properties(self):
        state = ResourceState({"name": "wf", "resource_group_name": "rg"})

        assert state.name == "wf"
        assert state.group == "rg"
        assert state.id == ""

    def test_set_id_does_not_touch_fields(self):
        state = ResourceState({"name": "wf"})

        state.set_id("/subscriptions/s/resourceGroups/rg")

        assert state.id == "/subscriptions/s/resourceGroups/rg"
        assert state.to_dict() == {"name": "wf"}

    def test_set_id_none_clears(self):
        state = ResourceState(resource_id="abc")
        state.set_id(None)
        assert state.id == ""

    def test_get_ok(self):
        state = ResourceState({"tags": {}, "location": "westeurope", "count": 0})

        assert state.get_ok("tags") == ({}, False)
        assert state.get_ok("location") == ("westeurope", True)
        assert state.get_ok("count") == (0, False)
        assert state.get_ok("missing") == (None, False)

    def test_to_dict_is_a_copy(self):
        state = ResourceState({"name": "wf"})
        state.to_dict()["name"] = "other"
        assert state.name == "wf"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        ("", True),
        ([], True),
        ({}, True),
        (False, True),
        (0, True),
        ("x", False),
        ([0], False),
        (True, False),
        (1.5, False),
    ],
)
def test_is_zero_value(value, expected):
    assert is_zero_value(value) is expected


class TestParseResourceId:
    def test_full_id(self):
        parsed = parse_resource_id(
            "/subscriptions/sub-1/resourceGroups/rg-1/providers/Microsoft.Logic/workflows/wf-1"
        )

        assert parsed == ResourceId(
            subscription_id="sub-1",
            resource_group="rg-1",
            provider="Microsoft.Logic",
            path={"workflows": "wf-1"},
        )

    def test_nested_child_resource(self):
        parsed = parse_resource_id(
            "/subscriptions/s/resourceGroups/rg/providers/Microsoft.ApiManagement/service/apim/apis/echo"
        )

        assert parsed.path == {"service": "apim", "apis": "echo"}

    def test_resource_group_key_is_case_insensitive(self):
        parsed = parse_resource_id("/subscriptions/s/resourcegroups/rg")
        assert parsed.resource_group == "rg"
        assert parsed.provider == ""

    @pytest.mark.parametrize(
        "resource_id",
        [
            "",
            "subscriptions/s/resourceGroups/rg",
            "/subscriptions/s/resourceGroups",
            "/subscriptions//resourceGroups/rg",
            "/resourceGroups/rg/providers/Microsoft.Logic",
            "/subscriptions/s/providers/Microsoft.Logic",
        ],
    )
    def test_invalid_ids(self, resource_id):
        with pytest.raises(InvalidResourceIdError):
            parse_resource_id(resource_id)
