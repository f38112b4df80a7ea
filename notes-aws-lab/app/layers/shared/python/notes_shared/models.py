# notes_shared/models.py
"""
Typed requests built from API Gateway proxy events.

Each ``from_event`` checks the caller identity first, so an unauthenticated
request is rejected before its body or path is looked at.
"""
import base64
import json
import uuid
from dataclasses import dataclass

from notes_shared.errors import InvalidRequest, NotFound, Unauthorized


def user_id_from_event(event):
    """The Cognito ``sub`` claim attached by the API Gateway authorizer."""
    claims = ((event.get("requestContext") or {}).get("authorizer") or {}).get("claims") or {}
    user_id = claims.get("sub")
    if not user_id:
        raise Unauthorized()
    return user_id


def json_body(event):
    body = event.get("body")
    if body is None or body == "":
        return {}
    if isinstance(body, dict):
        return body
    try:
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise InvalidRequest("Invalid JSON body") from e
    if not isinstance(data, dict):
        raise InvalidRequest("Invalid JSON body")
    return data


@dataclass(frozen=True)
class CreateNoteRequest:
    user_id: str
    title: str
    content: str = ""

    @classmethod
    def from_event(cls, event):
        user_id = user_id_from_event(event)
        body = json_body(event)
        title = body.get("title")
        if not title or not isinstance(title, str):
            raise InvalidRequest("Title is required")
        content = body.get("content") or ""
        if not isinstance(content, str):
            raise InvalidRequest("Content must be a string")
        return cls(user_id=user_id, title=title, content=content)


@dataclass(frozen=True)
class ListNotesRequest:
    user_id: str

    @classmethod
    def from_event(cls, event):
        return cls(user_id=user_id_from_event(event))


@dataclass(frozen=True)
class DeleteNoteRequest:
    user_id: str
    note_id: str

    @classmethod
    def from_event(cls, event):
        user_id = user_id_from_event(event)
        note_id = (event.get("pathParameters") or {}).get("id")
        if not note_id:
            raise InvalidRequest("Note ID is required")
        try:
            note_id = str(uuid.UUID(str(note_id)))
        except ValueError:
            # not a note id at all, so nothing the caller owns can match it
            raise NotFound()
        return cls(user_id=user_id, note_id=note_id)
