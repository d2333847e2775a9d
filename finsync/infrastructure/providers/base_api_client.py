"""Base API client for provider HTTP communication.

Shared by every provider data API:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation into the provider error taxonomy
- JSON object parsing with error handling
- Structured logging with provider context

Subclasses only need to:
1. Build authentication headers (Bearer token, API key, etc.)
2. Call _get_object() for each endpoint

Architecture:
    - Infrastructure layer (adapter for external APIs)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for provider failures)
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from finsync.core.constants import PROVIDER_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Result, Success
from finsync.domain.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)

type QueryParams = dict[str, str | int]


class BaseProviderAPIClient(ABC):
    """Base class for provider API clients with shared HTTP handling.

    Attributes:
        _base_url: Provider API base URL (without trailing slash).
        _provider_name: Provider slug for logging and error messages.
        _timeout: HTTP request timeout in seconds.
        _logger: Structured logger with provider context.

    Example:
        >>> class HotmartSalesAPI(BaseProviderAPIClient):
        ...     def _auth_headers(self, access_token: str) -> dict[str, str]:
        ...         return {"Authorization": f"Bearer {access_token}"}
        ...
        ...     async def get_sales_page(self, access_token: str):
        ...         return await self._get_object(
        ...             path="/payments/api/v1/sales/history",
        ...             access_token=access_token,
        ...             operation="get_sales_page",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        provider_name: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize base provider API client.

        Args:
            base_url: Provider API base URL (e.g., "https://api.pluggy.ai").
            provider_name: Provider slug (e.g., "hotmart", "open_finance").
            timeout: HTTP request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._provider_name = provider_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"{provider_name}_api")

    @property
    def _display_name(self) -> str:
        return self._provider_name.replace("_", " ").title()

    @abstractmethod
    def _auth_headers(self, access_token: str) -> dict[str, str]:
        """Build authentication headers for a request (Bearer token, API key)."""

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: QueryParams | None = None,
        operation: str,
    ) -> Result[httpx.Response, ProviderError]:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path relative to base_url.
            headers: HTTP headers including authentication.
            params: Optional query parameters.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(ProviderUnavailableError): On timeout or connection error.
        """
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=params,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                f"{self._provider_name}_api_timeout",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._display_name} API request timed out",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._provider_name}_api_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"Failed to connect to {self._display_name} API: {e}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Check HTTP response for errors and return appropriate ProviderError.

        Args:
            response: HTTP response to check.
            operation: Operation name for logging.

        Returns:
            Failure(ProviderError) if error detected, None if response is OK.
        """
        status = response.status_code

        if status == 200:
            return None

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
            self._logger.warning(
                f"{self._provider_name}_api_rate_limited",
                operation=operation,
                retry_after=retry_seconds,
            )
            return Failure(
                error=ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED,
                    message=f"{self._display_name} API rate limit exceeded",
                    provider_name=self._provider_name,
                    retry_after=retry_seconds,
                )
            )

        if status in (401, 403):
            self._logger.warning(
                f"{self._provider_name}_api_auth_failed",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=(
                        f"{self._display_name} access token is invalid or expired"
                        if status == 401
                        else f"Access denied to {self._display_name} resource"
                    ),
                    provider_name=self._provider_name,
                    is_token_expired=status == 401,
                )
            )

        if status >= 500:
            self._logger.warning(
                f"{self._provider_name}_api_server_error",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._display_name} API server error: {status}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        # 404 and any other unexpected status
        self._logger.warning(
            f"{self._provider_name}_api_unexpected_status",
            operation=operation,
            status_code=status,
        )
        return Failure(
            error=ProviderInvalidResponseError(
                code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                message=f"Unexpected response from {self._display_name}: {status}",
                provider_name=self._provider_name,
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Parse response as JSON object with error handling.

        Args:
            response: HTTP response to parse.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(ProviderError): On HTTP error or invalid JSON.
        """
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        try:
            data = response.json()
        except ValueError as e:
            self._logger.error(
                f"{self._provider_name}_api_invalid_json",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Invalid JSON response from {self._display_name}",
                    provider_name=self._provider_name,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        if not isinstance(data, dict):
            self._logger.warning(
                f"{self._provider_name}_api_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Expected object response from {self._display_name}",
                    provider_name=self._provider_name,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        self._logger.debug(
            f"{self._provider_name}_api_succeeded",
            operation=operation,
        )
        return Success(value=data)

    async def _get_object(
        self,
        *,
        path: str,
        access_token: str,
        params: QueryParams | None = None,
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Execute an authenticated GET and parse the response as a JSON object.

        Args:
            path: URL path relative to base_url.
            access_token: Token passed to _auth_headers().
            params: Optional query parameters.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(ProviderError): On any error.
        """
        result = await self._execute_request(
            method="GET",
            path=path,
            headers={
                "Accept": "application/json",
                **self._auth_headers(access_token),
            },
            params=params,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_object(result.value, operation)
