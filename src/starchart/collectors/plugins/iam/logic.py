"""IAM collection logic

This is where all the logic exists for pulling the IAM state out of an account: the users, roles, groups, their keys and policies.

:Module: starchart.collectors.plugins.iam.logic
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from typing import Any, Dict, List, Optional

from starchart.engines.fan_out import collect_per_entity, fan_out
from starchart.engines.pagination import collect, concatenate
from starchart.utils.aws import AsyncAwsClient
from starchart.utils.niceties import decode_policy_document

AUTHORIZATION_DETAILS_KEYS = ("UserDetailList", "GroupDetailList", "RoleDetailList", "Policies")

# Entity kind -> (name argument, list inline policies method, get inline policy method):
INLINE_POLICY_APIS = {
    "user": ("UserName", "list_user_policies", "get_user_policy"),
    "group": ("GroupName", "list_group_policies", "get_group_policy"),
    "role": ("RoleName", "list_role_policies", "get_role_policy"),
}


def decode_authorization_details(details: Dict[str, Any]) -> Dict[str, Any]:
    """Decodes all the policy documents that are nested in the account authorization details. This updates (and returns) the details in place."""
    for group in details.get("GroupDetailList", []):
        for policy in group.get("GroupPolicyList", []):
            policy["PolicyDocument"] = decode_policy_document(policy["PolicyDocument"])

    for role in details.get("RoleDetailList", []):
        role["AssumeRolePolicyDocument"] = decode_policy_document(role.get("AssumeRolePolicyDocument"))

        for policy in role.get("RolePolicyList", []):
            policy["PolicyDocument"] = decode_policy_document(policy["PolicyDocument"])

        # The role is also returned within each of its instance profiles:
        for instance_profile in role.get("InstanceProfileList", []):
            for inner_role in instance_profile.get("Roles", []):
                inner_role["AssumeRolePolicyDocument"] = decode_policy_document(inner_role.get("AssumeRolePolicyDocument"))

    for user in details.get("UserDetailList", []):
        for policy in user.get("UserPolicyList", []):
            policy["PolicyDocument"] = decode_policy_document(policy["PolicyDocument"])

    for policy in details.get("Policies", []):
        for version in policy.get("PolicyVersionList", []):
            version["Document"] = decode_policy_document(version["Document"])

    return details


async def get_account_authorization_details(client: AsyncAwsClient) -> Dict[str, Any]:
    """Fetches the account authorization details. Every page has a part of each of the 4 lists, so all 4 are concatenated."""
    details = await collect(client.capability("get_account_authorization_details"), concatenate(*AUTHORIZATION_DETAILS_KEYS))
    return decode_authorization_details(details)


async def list_account_aliases(client: AsyncAwsClient) -> Dict[str, Any]:
    """Lists the account aliases (there is at most 1, but it's a paginated API)."""
    return await collect(client.capability("list_account_aliases"), concatenate("AccountAliases"))


async def list_users(client: AsyncAwsClient) -> Dict[str, Any]:
    """Lists all the IAM users."""
    return await collect(client.capability("list_users"), concatenate("Users"))


async def list_roles(client: AsyncAwsClient) -> Dict[str, Any]:
    """Lists all the IAM roles, with the trust policies decoded."""
    roles = await collect(client.capability("list_roles"), concatenate("Roles"))
    for role in roles["Roles"]:
        role["AssumeRolePolicyDocument"] = decode_policy_document(role.get("AssumeRolePolicyDocument"))

    return roles


async def list_groups(client: AsyncAwsClient) -> Dict[str, Any]:
    """Lists all the IAM groups."""
    return await collect(client.capability("list_groups"), concatenate("Groups"))


def _merge_group_pages(previous: Dict[str, Any], page: Dict[str, Any]) -> Dict[str, Any]:
    """The group is on every page of `get_group`, only the members are paginated."""
    return {**previous, "Users": previous.get("Users", []) + page.get("Users", [])}


async def get_groups(client: AsyncAwsClient, group_names: List[str]) -> Dict[str, Dict[str, Any]]:
    """Gets every group (with all of its members), keyed by the group name."""

    async def get_group(group_name: str) -> Dict[str, Any]:
        return await collect(client.capability("get_group"), _merge_group_pages, {"GroupName": group_name})

    responses = await fan_out(group_names, get_group)
    return {response["Group"]["GroupName"]: response for response in responses}


async def _list_for_users(client: AsyncAwsClient, user_names: List[str], method: str, list_key: str, sort_key: Optional[str] = None) -> Dict[str, List[Any]]:
    """Makes the paginated `method` call for every user and concatenates all the `list_key` lists together."""

    async def list_for_user(user_name: str) -> Dict[str, Any]:
        return await collect(client.capability(method), concatenate(list_key), {"UserName": user_name})

    return await collect_per_entity(user_names, list_for_user, list_key, sort_key=sort_key)


async def list_access_keys(client: AsyncAwsClient, user_names: List[str]) -> Dict[str, List[Any]]:
    """Lists the access keys of all the users."""
    return await _list_for_users(client, user_names, "list_access_keys", "AccessKeyMetadata")


async def list_ssh_public_keys(client: AsyncAwsClient, user_names: List[str]) -> Dict[str, List[Any]]:
    """Lists the SSH public keys (for CodeCommit) of all the users."""
    return await _list_for_users(client, user_names, "list_ssh_public_keys", "SSHPublicKeys", sort_key="SSHPublicKeyId")


async def list_signing_certificates(client: AsyncAwsClient, user_names: List[str]) -> Dict[str, List[Any]]:
    """Lists the signing certificates of all the users."""
    return await _list_for_users(client, user_names, "list_signing_certificates", "Certificates", sort_key="CertificateId")


async def list_mfa_devices(client: AsyncAwsClient, user_names: List[str]) -> Dict[str, List[Any]]:
    """Lists the MFA devices of all the users."""
    return await _list_for_users(client, user_names, "list_mfa_devices", "MFADevices", sort_key="SerialNumber")


async def list_virtual_mfa_devices(client: AsyncAwsClient) -> Dict[str, List[Any]]:
    """Lists all the virtual MFA devices in the account -- including the ones that are not assigned to anyone."""
    devices = await collect(client.capability("list_virtual_mfa_devices"), concatenate("VirtualMFADevices"))
    devices["VirtualMFADevices"].sort(key=lambda device: device["SerialNumber"])

    return devices


async def get_inline_policies(client: AsyncAwsClient, entity_kind: str, entity_names: List[str]) -> Dict[str, Dict[str, Any]]:
    """
    Fetches the inline policies for all the users, groups, or roles (`entity_kind`) given. This returns a dictionary that looks like this:
    {
        "EntityName": {
            "PolicyName": {...the decoded policy document...}
        }
    }
    """
    name_arg, list_method, get_method = INLINE_POLICY_APIS[entity_kind]

    async def get_policies_for_entity(entity_name: str) -> Dict[str, Any]:
        policy_names = await collect(client.capability(list_method), concatenate("PolicyNames"), {name_arg: entity_name})

        async def get_policy(policy_name: str) -> Dict[str, Any]:
            return await client.call(get_method, **{name_arg: entity_name, "PolicyName": policy_name})

        policies = await fan_out(policy_names["PolicyNames"], get_policy)
        return {policy["PolicyName"]: decode_policy_document(policy["PolicyDocument"]) for policy in policies}

    all_policies = await fan_out(entity_names, get_policies_for_entity)
    return dict(zip(entity_names, all_policies))
