"""
Tests for SDK helpers and initialization.
"""

import pytest

import fastapi_interservice_sdk
from fastapi_interservice_sdk import ConfigurationError, SDKConfig, initialize_sdk, get_sdk_info
from fastapi_interservice_sdk.utils.helpers import build_url, generate_request_id


@pytest.fixture(autouse=True)
def reset_global_config():
    previous = SDKConfig.get_global_config()
    yield
    SDKConfig.set_global_config(previous)


class TestBuildUrl:
    """Test URL joining."""

    @pytest.mark.parametrize("host,path", [
        ("https://api.x.com", "/v1/items"),
        ("https://api.x.com//", "//v1/items"),
    ])
    def test_one_separating_slash(self, host, path):
        assert build_url(host, path) == "https://api.x.com/v1/items"

    def test_empty_path(self):
        assert build_url("https://api.x.com/", "") == "https://api.x.com"

    def test_base_with_prefix(self):
        assert build_url("https://api.x.com/gateway/", "/v1") == "https://api.x.com/gateway/v1"


class TestInitializeSdk:
    """Test SDK initialization."""

    def test_sets_global_config(self):
        config = initialize_sdk(SDKConfig(application_name="Svc1"))

        assert SDKConfig.get_global_config() is config
        info = get_sdk_info()
        assert info["version"] == fastapi_interservice_sdk.__version__
        assert info["config"]["application_name"] == "Svc1"
        assert info["build"]["python_compatible"]

    def test_rejects_invalid_config(self):
        with pytest.raises(ConfigurationError):
            initialize_sdk(SDKConfig(application_name=""))


def test_generate_request_id_unique():
    assert generate_request_id() != generate_request_id()
