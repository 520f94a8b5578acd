class ResponseStatus:
    FAILED = "failed"
    SUCCESS = "success"


ERROR_MESSAGE_FORMAT = (
    "Error Reported! \n"
    "network_id: {network_id}\n"
    "path: {path}, \n"
    "handler: {handler_name} \n"
    "pathParameters: {path_parameters} \n"
    "queryStringParameters: {query_string_parameters} \n"
    "body: {body} \n"
    "error_description: {error_description}\n"
)
