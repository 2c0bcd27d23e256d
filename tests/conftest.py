"""PyTest fixtures for the starchart package.

This defines the PyTest fixtures that can be used by all starchart tests.

:Module: starchart.tests.conftest
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
# pylint: disable=redefined-outer-name,unused-argument
import os
from typing import Any, Callable, Dict, Generator, Optional
from unittest import mock
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.client import BaseClient
from moto import mock_aws

import tests


@pytest.fixture
def test_configuration() -> Generator[Dict[str, Any], None, None]:
    """Fixture with a test configuration loader for use in unit tests."""
    from starchart.utils.configuration import STARCHART_CONFIGURATION

    old_value = STARCHART_CONFIGURATION._configuration_path
    STARCHART_CONFIGURATION._configuration_path = f"{tests.__path__[0]}/test_configuration_files"  # noqa
    STARCHART_CONFIGURATION._app_config = None

    yield STARCHART_CONFIGURATION.config

    STARCHART_CONFIGURATION._app_config = None
    STARCHART_CONFIGURATION._configuration_path = old_value


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-2"


@pytest.fixture
def mock_cached_conn() -> Generator[MagicMock, None, None]:
    """
    CloudAux caches the boto3 clients across tests, which doesn't play nicely with moto's per-test state. This swaps it out for a plain boto3 client
    (the MagicMock can be used to verify how it was called).
    """

    def plain_client(service: str, region: Optional[str] = None, **kwargs) -> BaseClient:  # noqa # pylint: disable=unused-argument
        return boto3.client(service, region_name=region)

    with mock.patch("starchart.utils.aws.boto3_cached_conn", side_effect=plain_client) as mocked:
        yield mocked


@pytest.fixture
def aws_iam(aws_credentials: None, mock_cached_conn: MagicMock) -> Generator[BaseClient, None, None]:
    """This is a fixture for a Moto wrapped AWS IAM mock for the entire unit test."""
    with mock_aws():
        yield boto3.client("iam", region_name="us-east-2")


@pytest.fixture
def aws_sqs(aws_credentials: None, mock_cached_conn: MagicMock) -> Generator[BaseClient, None, None]:
    """This is a fixture for a Moto wrapped AWS SQS mock for the entire unit test."""
    with mock_aws():
        yield boto3.client("sqs", region_name="us-east-2")


@pytest.fixture
def aws_s3(aws_credentials: None) -> Generator[BaseClient, None, None]:
    """This is a fixture for a Moto wrapped AWS S3 mock for the entire unit test."""
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-2")


@pytest.fixture
def snapshot_bucket(aws_s3: BaseClient) -> str:
    """This is the fixture of the S3 bucket that snapshots are saved to. This returns the name of the bucket back out."""
    aws_s3.create_bucket(Bucket="starchart-snapshots", CreateBucketConfiguration={"LocationConstraint": "us-east-2"})
    return "starchart-snapshots"


@pytest.fixture
def mock_retry() -> None:
    """
    This mocks out the retry decorator so things don't block.

    NOTE: GOTCHA ALERT:
    This fixture must be run **BEFORE** you import from a file that contains the @retry decorator. This is because this mocks out the original function.
    When imported AFTER the fixture is set, then you are importing the mocked out @retry decorator. If you import from a file with the @retry decorator in it
    BEFORE this fixture is set, then the function is decorated with the original @retry decorator.

    ## ALSO NOTE: This runs on *each and every* test -- set in the pytest options in pyproject.toml
    """

    def mock_retry_decorator(*args, **kwargs) -> Callable:  # noqa
        """This mocks out the retry decorator."""

        def retry(func: Callable) -> Callable:
            """This is the mocked out retry function itself that doesn't do anything."""
            return func

        return retry

    with mock.patch("retry.retry", mock_retry_decorator):
        yield
