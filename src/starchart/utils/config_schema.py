"""Starchart's configuration schema

This defines a basic Marshmallow schema for the Starchart configuration. This will ensure that the base configuration file
has the correct components on it.

:Module: starchart.utils.config_schema
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from typing import Any, Dict

from marshmallow import Schema, fields, INCLUDE, validate, validates_schema, ValidationError

from starchart.utils.niceties import get_all_regions

aws_regions = get_all_regions()


class StarchartSchema(Schema):
    """This is the main schema for Starchart itself."""

    # Required Fields:
    # This is the region that global services (IAM) are called in, and the default region for everything else:
    deployment_region = fields.String(required=True, data_key="DeploymentRegion", validate=validate.OneOf(aws_regions))

    # Optional fields:
    # The root directory for the local JSON snapshots:
    output_directory = fields.String(required=False, data_key="OutputDirectory", load_default="var")

    # The number of remote calls that can be in flight at the same time:
    max_workers = fields.Integer(required=False, data_key="MaxWorkers", load_default=20, validate=validate.Range(min=1))

    # If set, then the client handles are obtained by assuming the role in the given account:
    account_id = fields.String(required=False, data_key="AccountId", validate=validate.Regexp(r"^\d{12}$"))
    assume_role = fields.String(required=False, data_key="AssumeRole")
    session_name = fields.String(required=False, data_key="SessionName", load_default="starchart")

    # Log Level:
    log_level = fields.String(
        required=False, load_default="INFO", validate=validate.OneOf({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}), data_key="LogLevel"
    )
    # Dictionary to override log levels for 3rd party loggers. This is the name of the log and the level.
    third_party_logger_levels = fields.Dict(required=False, data_key="ThirdPartyLoggerLevels")

    @validates_schema(pass_original=True)
    def verify_schema(self, data: Dict[str, Any], original_data: Dict[str, Any], **kwargs) -> None:  # pylint: disable=unused-argument  # noqa
        """
        This validates that the schema is correct. At present, this is going to validate:
        1. That if AssumeRole is set, that we also have the AccountId to assume it in.
        """
        errors = {}
        if data.get("assume_role") and not data.get("account_id"):
            errors["AssumeRole"] = ["A role can only be assumed if the `AccountId` field is also configured."]

        if errors:
            raise ValidationError(errors)


class BaseConfigurationSchema(Schema):
    """The base configuration Schema for Starchart"""

    # Required fields:
    starchart = fields.Nested(StarchartSchema, required=True, data_key="STARCHART")

    class Meta:
        """Meta properties on the Schema used by Marshmallow"""

        unknown = INCLUDE  # The collector sections are validated by the collectors themselves
