# notes_shared/credentials.py
import json
import logging
import math
from dataclasses import dataclass, field

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from psycopg.conninfo import make_conninfo

from notes_shared.errors import SecretUnavailable

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("host", "port", "dbname", "username", "password")


@dataclass(frozen=True)
class Credentials:
    host: str
    port: int
    dbname: str
    username: str
    password: str = field(repr=False)

    def conninfo(self, connect_timeout=2):
        """libpq connection string; TLS is required but the server cert is not verified."""
        return make_conninfo(
            host=self.host,
            port=self.port,
            dbname=self.dbname,
            user=self.username,
            password=self.password,
            sslmode="require",
            connect_timeout=max(1, math.ceil(connect_timeout)),
        )


def _parse_secret(secret_string):
    try:
        data = json.loads(secret_string)
    except (TypeError, ValueError) as e:
        raise SecretUnavailable(f"Secret is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SecretUnavailable("Secret must be a JSON object")

    missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
    if missing:
        raise SecretUnavailable(f"Secret is missing fields: {', '.join(missing)}")

    try:
        port = int(data["port"])
    except (TypeError, ValueError) as e:
        raise SecretUnavailable(f"Secret has an invalid port: {data['port']!r}") from e

    return Credentials(
        host=str(data["host"]),
        port=port,
        dbname=str(data["dbname"]),
        username=str(data["username"]),
        password=str(data["password"]),
    )


def resolve_credentials(secret_id, client=None):
    """
    Fetch database credentials from Secrets Manager.
    One GetSecretValue call per invocation; failures are not retried.
    """
    if not secret_id:
        raise SecretUnavailable("DB_SECRET_ARN is not configured")

    client = client or boto3.client("secretsmanager")
    try:
        response = client.get_secret_value(SecretId=secret_id)
    except (ClientError, BotoCoreError) as e:
        raise SecretUnavailable(f"Unable to read secret {secret_id}: {e}") from e

    if "SecretString" not in response:
        raise SecretUnavailable(f"Secret {secret_id} has no SecretString")

    credentials = _parse_secret(response["SecretString"])
    logger.info("Resolved database credentials for %s@%s:%s/%s",
                credentials.username, credentials.host, credentials.port, credentials.dbname)
    return credentials
