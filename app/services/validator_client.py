"""
Client for the third-party email validation service.

The service answers GET <base>/validate?email=<email> with {"valid": bool}.
Anything else (transport error, timeout, non-200, malformed body) surfaces
as ValidatorError so callers can decide how to treat an unavailable upstream.
"""

import httpx

from app.infrastructure.observability.logging import get_logger
from app.models.domain.user_domain import ValidationResult

logger = get_logger(__name__)

VALIDATE_PATH = "/validate"
DEFAULT_TIMEOUT = 10.0  # seconds


class ValidatorError(Exception):
    """Raised when the validation service cannot give a usable answer."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmailValidatorClient:
    """Async HTTP client for the email validation service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def check(self, email: str) -> ValidationResult:
        """
        Ask the validation service whether an email is acceptable.

        Args:
            email: Candidate email address

        Returns:
            ValidationResult with the service's verdict

        Raises:
            ValidatorError: If the service is unreachable or answers badly
        """
        url = f"{self.base_url}{VALIDATE_PATH}"

        try:
            response = await self._client.get(url, params={"email": email})
        except httpx.HTTPError as e:
            logger.warning(
                "Validator request failed", error=str(e), error_type=type(e).__name__
            )
            raise ValidatorError(f"Validator request failed: {e}") from e

        if response.status_code != 200:
            logger.warning("Validator returned non-200", status_code=response.status_code)
            raise ValidatorError(
                f"Validator returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ValidatorError("Validator returned a non-JSON body", status_code=200) from e

        if not isinstance(data, dict) or not isinstance(data.get("valid"), bool):
            raise ValidatorError("Validator response missing boolean 'valid'", status_code=200)

        result = ValidationResult(valid=data["valid"])
        logger.debug("Validator verdict received", valid=result.valid)
        return result
