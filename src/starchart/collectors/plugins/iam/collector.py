"""Starchart's IAM collector

This exports the IAM state of the account: the authorization details, credential report, users, roles, groups, keys, MFA devices and inline policies.
This contains the entrypoint for the CLI as well.

:Module: starchart.collectors.plugins.iam.collector
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Dict, List

import click
from click import Context
from marshmallow import fields, validate

from starchart.collectors.cli_utils import StarchartCollectCommand
from starchart.collectors.plugins.iam.credential_report import decode_report_content, get_credential_report, parse_report
from starchart.collectors.plugins.iam.logic import (
    get_account_authorization_details,
    get_groups,
    get_inline_policies,
    list_access_keys,
    list_account_aliases,
    list_groups,
    list_mfa_devices,
    list_roles,
    list_signing_certificates,
    list_ssh_public_keys,
    list_users,
    list_virtual_mfa_devices,
)
from starchart.collectors.schematics import CollectorBaseConfigurationTemplate, StarchartCollector, persist
from starchart.utils.aws import AsyncAwsClient, get_client
from starchart.utils.logging import LOGGER
from starchart.utils.sinks import Sink

IAM_PATH = "service/iam"


class IamCollectorConfigurationTemplate(CollectorBaseConfigurationTemplate):
    """The configuration for the IamCollector. This largely defines how patient to be with the credential report."""

    report_settle_delay = fields.Float(required=False, data_key="ReportSettleDelay", load_default=2.0, validate=validate.Range(min=0))
    report_retry_delay = fields.Float(required=False, data_key="ReportRetryDelay", load_default=2.0, validate=validate.Range(min=0))
    report_max_attempts = fields.Integer(required=False, data_key="ReportMaxAttempts", load_default=120, validate=validate.Range(min=1))


class IamCollector(StarchartCollector):
    """This is a collector that exports the IAM state of the account."""

    configuration_template_class = IamCollectorConfigurationTemplate

    async def collect(self, executor: ThreadPoolExecutor, sink: Sink, **kwargs) -> Dict[str, Awaitable[Any]]:
        config = self.configuration
        client = AsyncAwsClient(get_client("iam"), executor)

        # These are needed by other resources, so they are shared tasks:
        details_task = asyncio.ensure_future(get_account_authorization_details(client))
        users_task = asyncio.ensure_future(list_users(client))
        roles_task = asyncio.ensure_future(list_roles(client))
        groups_task = asyncio.ensure_future(list_groups(client))

        async def user_names() -> List[str]:
            return [user["UserName"] for user in (await details_task)["UserDetailList"]]

        async def names_of(task: Awaitable[Dict[str, Any]], list_key: str, name_key: str) -> List[str]:
            return [item[name_key] for item in (await task)[list_key]]

        async def credential_report() -> None:
            report = await get_credential_report(
                client, settle_delay=config["report_settle_delay"], retry_delay=config["report_retry_delay"], max_attempts=config["report_max_attempts"]
            )
            csv_text = decode_report_content(report)
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(executor, sink.save_content, f"{IAM_PATH}/credential-report.raw", csv_text)
            await loop.run_in_executor(executor, sink.save_json, f"{IAM_PATH}/credential-report.json", parse_report(csv_text))

        async def per_user(func) -> Dict[str, Any]:
            return await func(client, await user_names())

        async def groups() -> Dict[str, Any]:
            return await get_groups(client, await names_of(groups_task, "Groups", "GroupName"))

        async def inline_policies(entity_kind: str, task: Awaitable[Dict[str, Any]], list_key: str, name_key: str) -> Dict[str, Any]:
            return await get_inline_policies(client, entity_kind, await names_of(task, list_key, name_key))

        return {
            "account-authorization-details": persist(executor, sink, f"{IAM_PATH}/account-authorization-details.json", details_task),
            "credential-report": credential_report(),
            "list-account-aliases": persist(executor, sink, f"{IAM_PATH}/list-account-aliases.json", list_account_aliases(client)),
            "list-users": persist(executor, sink, f"{IAM_PATH}/list-users.json", users_task),
            "list-roles": persist(executor, sink, f"{IAM_PATH}/list-roles.json", roles_task),
            "get-groups": persist(executor, sink, f"{IAM_PATH}/get-groups.json", groups()),
            "list-access-keys": persist(executor, sink, f"{IAM_PATH}/list-access-keys.json", per_user(list_access_keys)),
            "list-ssh-public-keys": persist(executor, sink, f"{IAM_PATH}/list-ssh-public-keys.json", per_user(list_ssh_public_keys)),
            "list-signing-certificates": persist(executor, sink, f"{IAM_PATH}/list-signing-certificates.json", per_user(list_signing_certificates)),
            "list-mfa-devices": persist(executor, sink, f"{IAM_PATH}/list-mfa-devices.json", per_user(list_mfa_devices)),
            "list-virtual-mfa-devices": persist(executor, sink, f"{IAM_PATH}/list-virtual-mfa-devices.json", list_virtual_mfa_devices(client)),
            "inline-user-policies": persist(
                executor, sink, f"{IAM_PATH}/inline-user-policies.json", inline_policies("user", users_task, "Users", "UserName")
            ),
            "inline-group-policies": persist(
                executor, sink, f"{IAM_PATH}/inline-group-policies.json", inline_policies("group", groups_task, "Groups", "GroupName")
            ),
            "inline-role-policies": persist(
                executor, sink, f"{IAM_PATH}/inline-role-policies.json", inline_policies("role", roles_task, "Roles", "RoleName")
            ),
        }


@click.group()
@click.pass_context
def iam(ctx: Context) -> None:
    """This is the collector for the IAM state of the account"""
    ctx.obj = IamCollector()


@iam.command(cls=StarchartCollectCommand)
@click.pass_context
def collect(ctx: Context, sink: Sink, **kwargs) -> None:  # noqa # pylint: disable=unused-argument
    """This will export the IAM users, roles, groups, keys, policies and the credential report"""
    collector = ctx.obj
    collector.execute(sink)

    LOGGER.info("[✅] Done!")
