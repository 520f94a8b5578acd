import sys
import traceback
from functools import wraps
from http import HTTPStatus
from logging import Logger

from common.alerts import MattermostProcessor
from common.constant import ResponseStatus
from common.exceptions import ClaimException
from common.utils import generate_lambda_response


def extract_parameters_from_event(event):
    path = event.get("path", None)
    path_parameters = event.get("pathParameters", {})
    query_string_parameters = event.get("queryStringParameters", {})
    body = event.get("body", "{}")
    return path, path_parameters, query_string_parameters, body


def get_error_description(e):
    exc_type, exc_obj, exc_tb = sys.exc_info()
    exc_tb_lines = traceback.format_tb(exc_tb)
    error_description = repr(e) + "\n"
    for exc_lines in exc_tb_lines:
        error_description = error_description + exc_lines
    return error_description


def prepare_response_message(error_code="", error_message="", error_details=""):
    return {
        "status": ResponseStatus.FAILED,
        "error": {
            "code": error_code,
            "message": error_message,
            "details": error_details
        }
    }


def exception_handler(*decorator_args, **decorator_kwargs):
    """Turn handler failures into API responses.

    ``ClaimException`` subclasses are answered with their own status and error
    code. Client errors are logged at info level; server errors (store or
    snapshot failures) are also reported to the alert channel. Anything else
    is logged with its traceback, reported to the alert channel and answered
    with a 500. ``RAISE_EXCEPTION`` re-raises unexpected errors
    after alerting, for callers (jobs) that want the failure to propagate.
    """
    logger: Logger = decorator_kwargs["logger"]
    network_id = decorator_kwargs.get("NETWORK_ID", None)
    processor_config: dict = decorator_kwargs.get("PROCESSOR_CONFIG", {})
    raise_exception: bool = decorator_kwargs.get("RAISE_EXCEPTION", False)

    alert_processor = MattermostProcessor(config=processor_config)

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            handler_name = decorator_kwargs.get("handler_name", func.__name__)
            event = kwargs.get("event", args[0] if len(args) > 0 else {})
            try:
                return func(*args, **kwargs)
            except ClaimException as e:
                if e.http_status >= HTTPStatus.INTERNAL_SERVER_ERROR:
                    path, path_parameters, query_string_parameters, body = extract_parameters_from_event(event)
                    error_message = alert_processor.prepare_error_message(network_id=network_id,
                                                                          query_string_parameters=query_string_parameters,
                                                                          path=path,
                                                                          handler_name=handler_name,
                                                                          path_parameters=path_parameters,
                                                                          body=body,
                                                                          error_description=get_error_description(e))
                    logger.exception(error_message)
                    alert_processor.send(type=1, message=error_message)
                else:
                    logger.info(f"{handler_name} rejected request: {e.error_code} {e.error_details}")
                return generate_lambda_response(
                    e.http_status.value,
                    e.error_details,
                    cors_enabled=True,
                    error_code=e.error_code,
                )
            except Exception as e:
                path, path_parameters, query_string_parameters, body = extract_parameters_from_event(event)
                error_description = get_error_description(e)
                error_message = alert_processor.prepare_error_message(network_id=network_id,
                                                                      query_string_parameters=query_string_parameters,
                                                                      path=path,
                                                                      handler_name=handler_name,
                                                                      path_parameters=path_parameters,
                                                                      body=body,
                                                                      error_description=error_description)
                logger.exception(error_message)
                alert_processor.send(type=1, message=error_message)
                if raise_exception:
                    raise e
                return generate_lambda_response(
                    HTTPStatus.INTERNAL_SERVER_ERROR.value,
                    ClaimException.default_details,
                    data=prepare_response_message(error_details=repr(e)),
                    cors_enabled=True,
                )

        return wrapper

    return decorator
