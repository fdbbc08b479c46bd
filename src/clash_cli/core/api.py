"""HTTP client for the Clash external controller.

This module wraps the controller endpoints used by the CLI:
- ``GET /proxies`` and ``PUT /proxies/{group}``
- ``GET /configs``, ``PUT /configs`` and ``PATCH /configs``
- ``GET /proxies/{name}/delay``
- ``GET /version``

Mutating calls succeed only on ``204 No Content``; anything else raises
:class:`ApiResponseError` with the body as returned by the controller.
Transport failures raise :class:`ApiConnectionError`. Nothing is retried
and no client-side timeout is set.

Example:
    with ClashClient(ClashConfig.from_env()) as client:
        client.set_mode("rule")
"""

from typing import Any, Final
from urllib.parse import quote

import requests
from loguru import logger

from clash_cli.core.config import ClashConfig
from clash_cli.core.exceptions import ApiConnectionError, ApiResponseError
from clash_cli.core.models import DelayResult, VersionInfo, decode_body

DELAY_TEST_TIMEOUT_MS: Final = 5000
DELAY_TEST_URL: Final = "http://www.gstatic.com/generate_204"


def path_segment(name: str) -> str:
    """Percent-encode a proxy or group name for use as a single path segment."""
    return quote(name, safe="")


class ClashClient:
    """Synchronous client for one controller.

    The client owns a ``requests.Session`` and closes it when used as a
    context manager.
    """

    def __init__(self, config: ClashConfig, session: requests.Session | None = None) -> None:
        self.base_url = config.api_base_url
        self.session = session or requests.Session()

    def __enter__(self) -> "ClashClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, json=payload)
        except requests.RequestException as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise ApiConnectionError(str(e)) from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def _expect_no_content(self, method: str, path: str, payload: dict[str, Any]) -> None:
        response = self._request(method, path, payload)
        if response.status_code != requests.codes.no_content:
            logger.debug(f"{method} {path} returned {response.status_code}: {response.text}")
            raise ApiResponseError(response.status_code, response.text)

    def get_proxies(self) -> dict[str, Any]:
        """Fetch all proxies and groups."""
        return decode_body(self._request("GET", "/proxies").text)

    def get_configs(self) -> dict[str, Any]:
        """Fetch the running configuration (mode, ports, ...)."""
        return decode_body(self._request("GET", "/configs").text)

    def get_version(self) -> VersionInfo:
        """Fetch the Clash core version."""
        return VersionInfo.from_body(self._request("GET", "/version").text)

    def switch_config(self, path: str) -> None:
        """Ask the controller to load the configuration file at ``path``."""
        self._expect_no_content("PUT", "/configs", {"path": path})

    def set_mode(self, mode: str) -> None:
        self._expect_no_content("PATCH", "/configs", {"mode": mode})

    def select_proxy(self, group: str, name: str) -> None:
        """Select member ``name`` in the Selector group ``group``."""
        self._expect_no_content("PUT", f"/proxies/{path_segment(group)}", {"name": name})

    def delay_test(
        self,
        name: str,
        timeout_ms: int = DELAY_TEST_TIMEOUT_MS,
        url: str = DELAY_TEST_URL,
    ) -> DelayResult:
        """Have the controller measure the delay of proxy ``name``.

        Args:
            name: Proxy to test
            timeout_ms: Timeout the controller applies to the test
            url: URL fetched through the proxy

        Returns:
            DelayResult: Measured delay, or ``None`` delay with the raw body
        """
        path = f"/proxies/{path_segment(name)}/delay?timeout={timeout_ms}&url={url}"
        return DelayResult.from_body(self._request("GET", path).text)
