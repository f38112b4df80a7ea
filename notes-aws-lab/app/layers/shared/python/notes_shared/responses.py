# notes_shared/responses.py
import datetime
import json
import uuid


def _default(value):
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def json_response(status_code, body, allow_origin="*"):
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": allow_origin,
        },
        "body": json.dumps(body, default=_default),
    }


def error_response(status_code, error, allow_origin="*", message=None):
    body = {"error": error}
    if message is not None:
        body["message"] = message
    return json_response(status_code, body, allow_origin)
