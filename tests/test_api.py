"""Tests for the external controller client."""

from unittest.mock import MagicMock

import pytest
import requests

from clash_cli.core.api import ClashClient, path_segment
from clash_cli.core.config import ClashConfig
from clash_cli.core.exceptions import ApiConnectionError, ApiResponseError

from .conftest import DELAY_QUERY, FakeController


def test_get_proxies(config: ClashConfig, controller: FakeController, proxies_body) -> None:
    controller.add("GET", "/proxies", body=proxies_body)

    with ClashClient(config) as client:
        assert client.get_proxies() == proxies_body


def test_get_configs_non_json_body(config: ClashConfig, controller: FakeController) -> None:
    controller.add("GET", "/configs", body="<html>oops</html>")

    with ClashClient(config) as client:
        assert client.get_configs() == {}


def test_switch_config_payload(config: ClashConfig, controller: FakeController) -> None:
    controller.add("PUT", "/configs", status_code=204)

    with ClashClient(config) as client:
        client.switch_config("/home/user/.config/clash/work.yaml")

    assert controller.calls == [("PUT", "/configs", {"path": "/home/user/.config/clash/work.yaml"})]


@pytest.mark.parametrize("status_code", [200, 400, 500])
def test_non_204_is_failure(config: ClashConfig, controller: FakeController, status_code: int) -> None:
    controller.add("PATCH", "/configs", status_code=status_code, body='{"message": "Body invalid"}')

    with ClashClient(config) as client, pytest.raises(ApiResponseError) as exc_info:
        client.set_mode("rule")

    assert exc_info.value.status_code == status_code
    assert exc_info.value.body == '{"message": "Body invalid"}'


def test_204_is_success_regardless_of_body(config: ClashConfig, controller: FakeController) -> None:
    controller.add("PATCH", "/configs", status_code=204, body="ignored")

    with ClashClient(config) as client:
        client.set_mode("direct")

    assert controller.calls == [("PATCH", "/configs", {"mode": "direct"})]


def test_select_proxy(config: ClashConfig, controller: FakeController) -> None:
    controller.add("PUT", "/proxies/Proxy", status_code=204)

    with ClashClient(config) as client:
        client.select_proxy("Proxy", "HK 01")

    assert controller.calls == [("PUT", "/proxies/Proxy", {"name": "HK 01"})]


def test_select_proxy_encodes_group(config: ClashConfig, controller: FakeController) -> None:
    controller.add("PUT", "/proxies/Streaming%2FVideo", status_code=204)

    with ClashClient(config) as client:
        client.select_proxy("Streaming/Video", "US 03")

    assert controller.paths() == ["/proxies/Streaming%2FVideo"]


def test_delay_test(config: ClashConfig, controller: FakeController) -> None:
    controller.add("GET", f"/proxies/P1/delay?{DELAY_QUERY}", body={"delay": 123.0})

    with ClashClient(config) as client:
        result = client.delay_test("P1")

    assert result.delay == 123.0


def test_delay_test_custom_parameters(config: ClashConfig, controller: FakeController) -> None:
    controller.add("GET", "/proxies/P1/delay?timeout=100&url=http://example.com", body={"delay": 9})

    with ClashClient(config) as client:
        assert client.delay_test("P1", timeout_ms=100, url="http://example.com").delay == 9


def test_get_version(config: ClashConfig, controller: FakeController) -> None:
    controller.add("GET", "/version", body={"version": "v1.18.0"})

    with ClashClient(config) as client:
        assert client.get_version().version == "v1.18.0"


def test_connection_error(config: ClashConfig, controller: FakeController) -> None:
    with ClashClient(config) as client, pytest.raises(ApiConnectionError, match="Connection refused"):
        client.get_proxies()


def test_timeout_is_connection_error(config: ClashConfig, controller: FakeController) -> None:
    controller.fail("GET", "/configs", requests.Timeout("read timed out"))

    with ClashClient(config) as client, pytest.raises(ApiConnectionError, match="read timed out"):
        client.get_configs()


def test_session_closed_on_error(config: ClashConfig) -> None:
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = requests.ConnectionError("down")

    with pytest.raises(ApiConnectionError):
        with ClashClient(config, session=session) as client:
            client.get_proxies()

    session.close.assert_called_once()


def test_path_segment() -> None:
    assert path_segment("GLOBAL") == "GLOBAL"
    assert path_segment("HK 01") == "HK%2001"
    assert path_segment("a/b?c#d") == "a%2Fb%3Fc%23d"
