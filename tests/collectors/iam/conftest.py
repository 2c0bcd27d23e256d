"""PyTest fixtures for the IAM collector

This defines the PyTest fixtures exclusively for the IAM collector.

:Module: starchart.tests.collectors.iam.conftest
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
# pylint: disable=redefined-outer-name,unused-argument,duplicate-code
import asyncio
import json
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict

import pytest
from botocore.client import BaseClient

TRUST_POLICY = {
    "Version": "2012-10-17",
    "Statement": [{"Effect": "Allow", "Principal": {"Service": "ec2.amazonaws.com"}, "Action": "sts:AssumeRole"}],
}

INLINE_POLICY = {
    "Version": "2012-10-17",
    "Statement": [{"Effect": "Allow", "Action": ["s3:GetObject"], "Resource": "*"}],
}

SSH_PUBLIC_KEY = (
    "ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQDPMdXmt0CUBIEZHTOomVJaN6CWq6ls+vgrvbfaBdfg+2WM7KTRqvU7k9ACTNOMK7dO1DBTrwL1ZSnYM3ocmSfQHqcV/PFN1pcVA7R"
    "5HrTKcGHZqd+/6WnFEzXRjCpF7Aw+/dXL2MYQbS0tDFc6ZPXR2CSbuOWIa3VyRU5lu9+Hi5QR8UyNwtjRPBNsd3JWczF9XOwUGRNEPhvAoSvLNtXDNVfOkxaewBJCsekBEGnw4M0i"
    "mqIhdYodP2hKCBfjmMQAdQMMQvb8QfJfuvtZQJMlWwmwAVZuWkQhMsHKPbcS/QBZXKkyj/MxnTjs4qLDJmFtUmKdV2Q4DOx4BvSNqPl/ test@example.com"
)


@pytest.fixture
def iam_account(aws_iam: BaseClient) -> BaseClient:
    """This creates a small IAM account in moto: 3 users (1 of them with keys, an MFA device, and an inline policy), a group, and a role."""
    aws_iam.create_account_alias(AccountAlias="starchart-testing")

    for user_name in ["carol", "alice", "bob"]:
        aws_iam.create_user(UserName=user_name)

    aws_iam.create_access_key(UserName="alice")
    aws_iam.create_access_key(UserName="alice")
    aws_iam.upload_ssh_public_key(UserName="alice", SSHPublicKeyBody=SSH_PUBLIC_KEY)
    aws_iam.put_user_policy(UserName="alice", PolicyName="AliceInline", PolicyDocument=json.dumps(INLINE_POLICY))

    device = aws_iam.create_virtual_mfa_device(VirtualMFADeviceName="alice-mfa")["VirtualMFADevice"]
    aws_iam.enable_mfa_device(UserName="alice", SerialNumber=device["SerialNumber"], AuthenticationCode1="123456", AuthenticationCode2="123456")
    aws_iam.create_virtual_mfa_device(VirtualMFADeviceName="unassigned-mfa")

    aws_iam.create_group(GroupName="admins")
    aws_iam.add_user_to_group(GroupName="admins", UserName="alice")
    aws_iam.add_user_to_group(GroupName="admins", UserName="bob")
    aws_iam.put_group_policy(GroupName="admins", PolicyName="AdminsInline", PolicyDocument=json.dumps(INLINE_POLICY))
    aws_iam.create_group(GroupName="empty")

    aws_iam.create_role(RoleName="SomeRole", AssumeRolePolicyDocument=json.dumps(TRUST_POLICY))
    aws_iam.put_role_policy(RoleName="SomeRole", PolicyName="RoleInline", PolicyDocument=json.dumps(INLINE_POLICY))

    return aws_iam


@pytest.fixture
def run_iam(test_configuration: Dict[str, Any], iam_account: BaseClient) -> Callable:
    """Returns a function that runs an IAM logic coroutine function (with the async client as the first argument) to completion."""
    from starchart.utils.aws import AsyncAwsClient, get_client

    def run(func: Callable, *args, **kwargs) -> Any:
        async def runner() -> Any:
            with ThreadPoolExecutor(max_workers=5) as executor:
                return await func(AsyncAwsClient(get_client("iam"), executor), *args, **kwargs)

        return asyncio.run(runner())

    return run
