import json
from abc import ABC, abstractmethod
from functools import wraps

import requests

from common.constant import ERROR_MESSAGE_FORMAT
from common.logger import get_logger

logger = get_logger(__name__)


def delivery_exception_handler(method):

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            self.health_check()
            return method(self, *args, **kwargs)
        except AssertionError as e:
            logger.warning(f"Failed to send alert ({e})", exc_info=False)
        except requests.RequestException as e:
            logger.warning(f"Failed to send alert ({repr(e)})", exc_info=True)

    return wrapper


class AlertsProcessor(ABC):

    @property
    @abstractmethod
    def name(self):
        """Name of the alert channel, used in log lines"""
        return "Abstract"

    @abstractmethod
    def health_check(self):
        """Check that the processor is configured well enough to deliver.

        Use bare assertions only; ``delivery_exception_handler`` turns a
        failed assertion into a warning instead of an error.
        """

    @staticmethod
    def prepare_error_message(network_id, query_string_parameters, path, handler_name,
                              path_parameters, body, error_description) -> str:
        return ERROR_MESSAGE_FORMAT.format(
            network_id=network_id,
            query_string_parameters=query_string_parameters,
            path=path,
            handler_name=handler_name,
            path_parameters=path_parameters,
            body=body,
            error_description=error_description
        )

    @abstractmethod
    def send(self, type: int, message: str):
        """Deliver a notification message to the alert channel"""


class MattermostProcessor(AlertsProcessor):

    @property
    def name(self):
        return "Mattermost"

    def __init__(self, config: dict) -> None:
        self.msg_type = {0: ":information_source: ", 1: ":warning: "}
        self.url = config.get("url")

    def health_check(self) -> None:
        assert self.url and isinstance(self.url, str), "Bad mattermost url value"

    @delivery_exception_handler
    def send(self, type: int, message: str) -> None:
        headers = {"Content-Type": "application/json"}
        prefix = "### " + self.msg_type.get(type, "")
        payload = {"text": prefix + message}
        response = requests.post(self.url, headers=headers, data=json.dumps(payload), timeout=10)
        logger.info(f"{self.name} response [code {response.status_code}]: {response.text}")
