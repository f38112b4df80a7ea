# app/lambdas/list_notes/handler.py
import logging

from notes_shared import api_handler, get_pool, notes
from notes_shared.config import log_level
from notes_shared.models import ListNotesRequest

logger = logging.getLogger()
logger.setLevel(log_level())


@api_handler
def lambda_handler(event, context):
    """GET /notes, most recently updated first."""
    request = ListNotesRequest.from_event(event)
    rows = notes.list_notes(get_pool(), request.user_id)
    return 200, {"notes": rows, "count": len(rows)}
