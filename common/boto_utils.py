import json

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from common.logger import get_logger

logger = get_logger(__name__)


class BotoUtils:
    def __init__(self, region_name):
        self.region_name = region_name
        self.config = Config(retries=dict(max_attempts=2))

    def get_secret_value(self, secret_name, secret_key=None):
        """Read a Secrets Manager secret.

        JSON secrets are decoded and ``secret_key`` (the secret name when not
        given) is returned from them; plain string secrets are returned as is.
        """
        try:
            client = boto3.client(service_name="secretsmanager", region_name=self.region_name, config=self.config)
            secret_string = client.get_secret_value(SecretId=secret_name)["SecretString"]
            logger.info(f"Retrieved secret {secret_name}")
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to fetch secret {secret_name}: {e}")
            raise e

        try:
            secret = json.loads(secret_string)
        except ValueError:
            return secret_string
        if isinstance(secret, dict):
            return secret[secret_key or secret_name]
        return secret_string
