"""A general set of niceties that Starchart can use to do things that are nice.

This mostly defines some shortcut code utilities that the collectors can use for a variety of use cases.

:Module: starchart.utils.niceties
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import datetime
import json
from typing import Any, Set
from urllib.parse import unquote

import boto3


def get_all_regions(service: str = "ec2") -> Set[str]:
    """
    This will return all supported AWS regions for the supplied service. By default, this returns the set for EC2.

    This is placed here as a function so that we can easily mock out the values with a static set of values that will persist throughout boto3 updates.
    """
    return set(boto3.session.Session().get_available_regions(service))


def decode_policy_document(document: Any) -> Any:
    """IAM returns policy documents as URL encoded JSON strings. This decodes them into objects.

    boto3 normally does this already, so anything that is not a string is returned as-is.
    """
    if not isinstance(document, str):
        return document

    decoded = unquote(document)

    # Check if the string starts with a "[" or a "{" (because '123' is also valid JSON):
    if decoded.lstrip().startswith(("{", "[")):
        return json.loads(decoded)

    return decoded


def json_serial(obj: Any) -> str:
    """JSON `default` hook for the types boto3 hands back that json can't serialize on its own."""
    if isinstance(obj, (datetime.datetime, datetime.date)):
        return obj.isoformat()

    if isinstance(obj, bytes):
        return obj.decode("utf-8")

    raise TypeError(f"Type {type(obj)} is not serializable: {obj}")
