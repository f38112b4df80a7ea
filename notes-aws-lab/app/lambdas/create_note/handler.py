# app/lambdas/create_note/handler.py
import logging

from notes_shared import api_handler, get_pool, notes
from notes_shared.config import log_level
from notes_shared.models import CreateNoteRequest

logger = logging.getLogger()
logger.setLevel(log_level())


@api_handler
def lambda_handler(event, context):
    """
    POST /notes
    Store a note for the caller; content defaults to an empty string.
    """
    request = CreateNoteRequest.from_event(event)
    note = notes.create_note(get_pool(), request.user_id, request.title, request.content)
    logger.info("Created note %s for %s", note["id"], request.user_id)
    return 201, {"note": note}
