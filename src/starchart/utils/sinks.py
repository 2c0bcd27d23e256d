"""Starchart's durable sinks

The collectors hand each finished resource to a sink, which persists one complete structure per resource name. The collectors have no opinion about
where it ends up.

:Module: starchart.utils.sinks
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import json
import os
import tempfile
from typing import Any

import boto3
from retry import retry

from starchart.utils.logging import LOGGER
from starchart.utils.niceties import json_serial


def dump_json(data: Any) -> str:
    """The JSON rendering used by all sinks. Keys are sorted so that snapshots can be diffed."""
    return json.dumps(data, indent=2, sort_keys=True, default=json_serial) + "\n"


class Sink:
    """The base sink. Subclasses need to implement `save_content`."""

    def save_content(self, name: str, content: str) -> None:
        """Persists the raw text content under the given resource name."""
        raise NotImplementedError("pew pew pew")  # pragma: no cover

    def save_json(self, name: str, data: Any) -> None:
        """Persists the data as JSON under the given resource name."""
        self.save_content(name, dump_json(data))


class LocalDirectorySink(Sink):
    """Writes every resource into a file below the root directory. Writes are atomic: a reader will see either the old or the new file."""

    def __init__(self, root: str):
        self.root = root

    def save_content(self, name: str, content: str) -> None:
        path = os.path.join(self.root, name)
        directory = os.path.dirname(path)
        os.makedirs(directory, exist_ok=True)

        # The temp file must be on the same filesystem for os.replace to be atomic, so it goes in the target's directory:
        file_descriptor, temp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=os.path.basename(path))
        try:
            with os.fdopen(file_descriptor, "w", encoding="utf-8") as stream:
                stream.write(content)

            os.replace(temp_path, path)

        except Exception:
            LOGGER.error(f"[💥] Unable to write: {path}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        LOGGER.debug(f"[💾] Saved: {path}")


class S3Sink(Sink):
    """Writes every resource as an object in an S3 bucket. A single put_object is already atomic from the reader's point of view."""

    def __init__(self, bucket: str, region: str, prefix: str = ""):
        self.bucket = bucket
        self.prefix = prefix
        self.client = boto3.client("s3", region_name=region)

    @retry(tries=3, jitter=(0, 3), delay=1, backoff=2, max_delay=3, logger=LOGGER)
    def save_content(self, name: str, content: str) -> None:
        key = f"{self.prefix}{name}"
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            ACL="bucket-owner-full-control",
            Body=content.encode("utf-8"),
            ContentType="application/json" if name.endswith(".json") else "text/plain",
        )
        LOGGER.debug(f"[🪣] Saved: s3://{self.bucket}/{key}")


class LoggingSink(Sink):
    """Doesn't persist anything: it just logs out what would have been saved. This is for dry runs."""

    def save_content(self, name: str, content: str) -> None:
        LOGGER.info(f"[🍣] {name}:\n{content}")
