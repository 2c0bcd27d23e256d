"""Starchart's readiness poller

Some resources (like the IAM credential report) are generated asynchronously on the server side and have to be requested first. This polls for them,
triggering the generation when they are absent and backing off while they are being generated.

:Module: starchart.engines.readiness
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from botocore.exceptions import ClientError

from starchart.utils.logging import LOGGER


class Readiness(Enum):
    """How a failed read of a generated resource is to be handled."""

    ABSENT = 1  # Not present or expired -- needs to be generated
    IN_PROGRESS = 2  # Being generated -- wait and try again
    OTHER_FAILURE = 3  # Anything else is fatal


class UnexpectedContentTypeError(Exception):
    """Raised if a ready payload is not in the expected format. Retrying can't fix that, so this is fatal."""


class ReadinessTimeoutError(Exception):
    """Raised if the resource did not become ready within the maximum number of read attempts."""


Classification = Tuple[Readiness, Optional[float]]

ABSENT_ERROR_CODES = {"ReportNotPresent", "ReportExpired"}
IN_PROGRESS_ERROR_CODES = {"ReportInProgress"}


def classify_report_error(exc: Exception) -> Classification:
    """
    Classifies the errors that the IAM report APIs raise. This returns the Readiness and the retry delay (in seconds) that the server suggested,
    if any. The error codes are checked first and the HTTP status codes (410 = gone, 404 = not yet there) are the fallback.
    """
    if not isinstance(exc, ClientError):
        return Readiness.OTHER_FAILURE, None

    code = exc.response.get("Error", {}).get("Code")
    metadata = exc.response.get("ResponseMetadata", {})
    status = metadata.get("HTTPStatusCode")

    if code in ABSENT_ERROR_CODES or (code not in IN_PROGRESS_ERROR_CODES and status == 410):
        return Readiness.ABSENT, None

    if code in IN_PROGRESS_ERROR_CODES or status == 404:
        retry_after = metadata.get("HTTPHeaders", {}).get("retry-after")
        try:
            return Readiness.IN_PROGRESS, float(retry_after) if retry_after else None
        except ValueError:
            return Readiness.IN_PROGRESS, None

    return Readiness.OTHER_FAILURE, None


class ReadinessPoller:
    """
    Obtains a ready payload from a read capability, driving the generate capability as needed:

        ABSENT         -> generate, wait `settle_delay`, read again
        IN_PROGRESS    -> wait the server's suggested delay (or `retry_delay`), read again
        OTHER_FAILURE  -> the original exception is raised
        success        -> the payload is returned if `content_type_key` is `expected_content_type`

    The waits are `asyncio.sleep`s, so only this poll sequence is suspended while waiting. By default there is no limit on the number of reads. Set
    `max_attempts` to bound it.
    """

    def __init__(
        self,
        read: Callable[[], Awaitable[Dict[str, Any]]],
        generate: Callable[[], Awaitable[Any]],
        expected_content_type: str,
        content_type_key: str = "ReportFormat",
        classifier: Callable[[Exception], Classification] = classify_report_error,
        settle_delay: float = 2.0,
        retry_delay: float = 2.0,
        max_attempts: Optional[int] = None,
    ):
        self.read = read
        self.generate = generate
        self.expected_content_type = expected_content_type
        self.content_type_key = content_type_key
        self.classifier = classifier
        self.settle_delay = settle_delay
        self.retry_delay = retry_delay
        self.max_attempts = max_attempts

    async def obtain(self) -> Dict[str, Any]:
        """Polls until the payload is ready and returns it."""
        attempts = 0
        while True:
            if self.max_attempts is not None and attempts >= self.max_attempts:
                LOGGER.error(f"[💥] The resource was still not ready after {attempts} attempts.")
                raise ReadinessTimeoutError(attempts)

            attempts += 1
            try:
                payload = await self.read()
                break

            except Exception as exc:  # pylint: disable=broad-except
                readiness, suggested_delay = self.classifier(exc)
                if readiness == Readiness.OTHER_FAILURE:
                    raise

                if readiness == Readiness.ABSENT:
                    LOGGER.info("[🏭] The resource is not present (or has expired). Requesting that it be generated...")
                    await self.generate()
                    await asyncio.sleep(self.settle_delay)

                else:
                    delay = self.retry_delay if suggested_delay is None else suggested_delay
                    LOGGER.debug(f"[⏳] The resource is still being generated. Trying again in {delay} seconds...")
                    await asyncio.sleep(delay)

        if payload.get(self.content_type_key) != self.expected_content_type:
            LOGGER.error(f"[💥] Expected a payload of type: {self.expected_content_type}, but got: {payload.get(self.content_type_key)}")
            raise UnexpectedContentTypeError(self.expected_content_type, payload.get(self.content_type_key))

        LOGGER.debug(f"[✅] The resource was ready after {attempts} attempt(s).")
        return payload
