# notes_shared/handler.py
import functools
import json
import logging

from notes_shared.config import Settings, get_settings
from notes_shared.errors import NotesError
from notes_shared.responses import error_response, json_response

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# used to answer when the environment itself cannot be read
FALLBACK_SETTINGS = Settings(db_secret_arn="")


def api_handler(func):
    """
    Wrap ``func(event, context) -> (status_code, body)`` as an API Gateway
    proxy handler.

    Client errors (``NotesError`` with a status code) become their own
    response; anything else, bad configuration included, is logged and
    returned as a 500.
    """

    @functools.wraps(func)
    def wrapper(event, context):
        logger.info("Received event: %s", json.dumps(event, default=str))

        try:
            settings = get_settings()
        except ValueError as e:
            return _internal_error(e, FALLBACK_SETTINGS)
        origin = settings.cors_allow_origin

        try:
            status_code, body = func(event, context)
        except NotesError as e:
            if e.status_code is None:
                return _internal_error(e, settings)
            logger.info("Rejected request with %s: %s", e.status_code, e)
            return error_response(e.status_code, str(e), origin)
        except Exception as e:
            return _internal_error(e, settings)

        return json_response(status_code, body, origin)

    return wrapper


def _internal_error(exc, settings):
    logger.exception("Error: %s", exc)
    message = str(exc) if settings.expose_error_details else GENERIC_ERROR_MESSAGE
    return error_response(500, "Internal server error", settings.cors_allow_origin, message=message)
