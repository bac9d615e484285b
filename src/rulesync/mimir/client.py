"""
Mimir/Cortex Ruler API client.

Reads and writes Prometheus rule groups through the ruler configuration API.

API endpoints (relative to rules_path, default /prometheus/config/v1/rules):
    GET  {rules_path}              - List all rule groups, by namespace
    POST {rules_path}/{namespace}  - Create or replace one rule group
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol
from urllib.parse import quote

import httpx
import structlog
import yaml
from circuitbreaker import CircuitBreakerError, circuit
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from rulesync import __version__
from rulesync.config.settings import Settings
from rulesync.core.errors import ConfigurationError, RemoteError
from rulesync.mimir.models import (
    PrometheusRuleGroup,
    PrometheusRuleGrouping,
    parse_rule_groupings,
)

logger = structlog.get_logger()

DEFAULT_USER_AGENT = f"rulesync/{__version__}"
DEFAULT_RULES_PATH = "/prometheus/config/v1/rules"
SUCCESS_STATUSES = (200, 201, 202, 204)


class MimirRulerError(RemoteError):
    """Raised when the Mimir Ruler API encounters an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, details={"status_code": status_code} if status_code else None)
        self.status_code = status_code


class RetryableHTTPError(Exception):
    """HTTP errors that should be retried."""


def is_retryable_status(status_code: int) -> bool:
    """Determine if HTTP status code is retryable."""
    return status_code in (408, 429, 500, 502, 503, 504)


class RulerClient(Protocol):
    """Operations the rule-group handler needs from the ruler."""

    def list_rules(self) -> Dict[str, List[PrometheusRuleGroup]]:
        ...

    def create_rules(self, grouping: PrometheusRuleGrouping) -> None:
        ...


class MimirRulerClient:
    """
    Ruler API client with retry logic and circuit breaker.

    The ruler has no separate update call: posting a group with an existing
    name replaces it.
    """

    def __init__(
        self,
        address: str,
        *,
        tenant_id: str | None = None,
        api_key: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        rules_path: str = DEFAULT_RULES_PATH,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """
        Initialize Mimir Ruler client.

        Args:
            address: Base URL of Mimir (or the Cortex ruler)
            tenant_id: Tenant ID for multi-tenant setups (X-Scope-OrgID header)
            api_key: Bearer token for authentication
            username: Basic auth username
            password: Basic auth password
            timeout: Request timeout in seconds
            rules_path: Path of the ruler config API
            user_agent: User agent string
        """
        self._base_url = address.rstrip("/")
        self._tenant_id = tenant_id
        self._api_key = api_key
        self._timeout = timeout
        self._rules_path = "/" + rules_path.strip("/")
        self._user_agent = user_agent
        self._auth = (username, password) if username and password else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MimirRulerClient":
        if not settings.mimir_address:
            raise ConfigurationError(
                "Mimir address is not configured (set RULESYNC_MIMIR_ADDRESS)"
            )
        return cls(
            settings.mimir_address,
            tenant_id=settings.mimir_tenant_id,
            api_key=settings.mimir_api_key,
            username=settings.mimir_username,
            password=settings.mimir_password,
            timeout=settings.http_timeout,
            rules_path=settings.mimir_rules_path,
        )

    def list_rules(self) -> Dict[str, List[PrometheusRuleGroup]]:
        """
        List all rule groups across all namespaces.

        Returns:
            Dictionary of namespaces to rule groups

        Raises:
            MimirRulerError: If the API request fails
        """
        response = self._send("GET", self._rules_path)

        # Mimir answers 404 when the tenant has no rule groups at all
        if response.status_code == 404:
            return {}
        self._check(response, "list rules")

        try:
            return parse_rule_groupings(yaml.safe_load(response.text))
        except (yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
            raise MimirRulerError(f"Failed to parse rule list: {e}") from e

    def create_rules(self, grouping: PrometheusRuleGrouping) -> None:
        """
        Create or replace every group of a grouping in its namespace.

        Raises:
            MimirRulerError: If the API request fails
        """
        path = f"{self._rules_path}/{quote(grouping.namespace, safe='')}"
        for group in grouping.groups:
            response = self._send(
                "POST",
                path,
                content=group.to_yaml(),
                headers={"Content-Type": "application/yaml"},
            )
            self._check(response, f"push rule group {grouping.namespace}/{group.name}")
            logger.info(
                "rule_group_pushed",
                namespace=grouping.namespace,
                group=group.name,
                rules=len(group.rules),
            )

    def _build_headers(self) -> dict[str, str]:
        """Build request headers."""
        headers = {
            "User-Agent": self._user_agent,
        }

        if self._tenant_id:
            headers["X-Scope-OrgID"] = self._tenant_id

        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        return headers

    def _check(self, response: httpx.Response, action: str) -> None:
        if response.status_code in SUCCESS_STATUSES:
            return
        error_text = response.text[:200] if response.text else "Unknown error"
        raise MimirRulerError(
            f"Failed to {action}: {response.status_code} {error_text}",
            status_code=response.status_code,
        )

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            return self._request(method, url, **kwargs)
        except RetryableHTTPError as e:
            raise MimirRulerError(f"Mimir request {method} {url} failed: {e}") from e
        except CircuitBreakerError as e:
            raise MimirRulerError(f"Mimir at {self._base_url} is unavailable: {e}") from e

    @circuit(
        failure_threshold=5,
        recovery_timeout=60,
        expected_exception=RetryableHTTPError,
    )
    @retry(
        retry=retry_if_exception_type(RetryableHTTPError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
        reraise=True,
    )
    def _request(
        self,
        method: str,
        url: str,
        *,
        content: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute HTTP request with retry and circuit breaker."""
        req_headers = self._build_headers()
        if headers:
            req_headers.update(headers)

        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.request(
                    method,
                    url,
                    content=content,
                    headers=req_headers,
                    auth=self._auth,  # type: ignore[arg-type]
                )
        except (httpx.TimeoutException, httpx.ConnectError, httpx.ReadError) as exc:
            logger.warning("ruler_network_error", method=method, url=url, error=str(exc))
            raise RetryableHTTPError(str(exc)) from exc
        except httpx.HTTPError as exc:
            raise MimirRulerError(f"HTTP error from Mimir: {exc}") from exc

        if is_retryable_status(response.status_code):
            logger.warning(
                "ruler_retryable_error",
                status=response.status_code,
                method=method,
                url=url,
            )
            raise RetryableHTTPError(f"HTTP {response.status_code}: {response.text[:200]}")

        return response
