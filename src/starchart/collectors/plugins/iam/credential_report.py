"""The IAM credential report

The credential report is generated asynchronously by IAM, so this has to request it and wait for it to be ready (see the ReadinessPoller).

:Module: starchart.collectors.plugins.iam.credential_report
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import base64
import csv
import io
from typing import Any, Dict, Optional

from starchart.engines.readiness import ReadinessPoller
from starchart.utils.aws import AsyncAwsClient

CREDENTIAL_REPORT_FORMAT = "text/csv"


async def get_credential_report(
    client: AsyncAwsClient, settle_delay: float = 2.0, retry_delay: float = 2.0, max_attempts: Optional[int] = None
) -> Dict[str, Any]:
    """Gets the credential report, generating it first if it is not present (or has expired)."""
    poller = ReadinessPoller(
        client.capability("get_credential_report"),
        client.capability("generate_credential_report"),
        CREDENTIAL_REPORT_FORMAT,
        settle_delay=settle_delay,
        retry_delay=retry_delay,
        max_attempts=max_attempts,
    )
    return await poller.obtain()


def decode_report_content(report: Dict[str, Any]) -> str:
    """Returns the report's CSV text. boto3 hands back the decoded bytes; anything else is treated as the raw base64 from the wire."""
    content = report["Content"]
    if isinstance(content, str):
        content = base64.b64decode(content)

    text = content.decode("utf-8")
    if text and not text.endswith("\n"):
        text += "\n"

    return text


def parse_report(csv_text: str) -> Dict[str, Any]:
    """Parses the CSV into a list of rows, each a dictionary keyed by the CSV header."""
    return {"CredentialReport": list(csv.DictReader(io.StringIO(csv_text)))}
