# app/lambdas/delete_note/handler.py
import logging

from notes_shared import api_handler, get_pool, notes
from notes_shared.config import log_level
from notes_shared.errors import NotFound
from notes_shared.models import DeleteNoteRequest

logger = logging.getLogger()
logger.setLevel(log_level())


@api_handler
def lambda_handler(event, context):
    """
    DELETE /notes/{id}
    A note owned by someone else matches no row and reads as not found.
    """
    request = DeleteNoteRequest.from_event(event)
    deleted_id = notes.delete_note(get_pool(), request.note_id, request.user_id)
    if deleted_id is None:
        raise NotFound()
    logger.info("Deleted note %s for %s", deleted_id, request.user_id)
    return 200, {"message": "Note deleted successfully", "id": deleted_id}
