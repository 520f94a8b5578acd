import json
from http import HTTPStatus

from common.exceptions import BadRequest
from common.logger import get_logger

logger = get_logger(__name__)


def request(event):
    inputs = event.get("body") or None
    if inputs is None:
        return {}
    if isinstance(inputs, dict):
        return inputs
    try:
        return json.loads(inputs)
    except ValueError as e:
        logger.warning(f"Unable to parse request body: {e}")
        raise BadRequest("Request body is not valid JSON")


def query_parameter(event, name, default=None):
    parameters = event.get("queryStringParameters") or {}
    return parameters.get(name, default)


def generate_lambda_response(
    status_code, message, data=None, headers=None, cors_enabled=False, error_code=None
):

    if HTTPStatus.OK.value <= status_code <= HTTPStatus.ALREADY_REPORTED.value:
        body = {"status": status_code, "data": data, "message": message}
    else:
        body = {
            "error": {"code": error_code or 0, "message": message},
            "data": data,
            "status": status_code,
        }

    response = {
        "statusCode": status_code,
        "body": json.dumps(body),
        "headers": {"Content-Type": "application/json"},
    }
    if cors_enabled:
        response["headers"].update(
            {
                "X-Requested-With": "*",
                "Access-Control-Allow-Headers": "Access-Control-Allow-Origin, Content-Type, X-Amz-Date, Authorization,"
                "X-Api-Key,x-requested-with",
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "GET,OPTIONS,POST",
            }
        )
    if headers is not None:
        response["headers"].update(headers)
    return response


def load_json(path):
    with open(path) as f:
        return json.load(f)
