# notes_shared/notes.py
"""SQL for the notes table. Every statement is scoped by user_id."""
from notes_shared.pool import checkout

INSERT_NOTE = (
    "INSERT INTO notes (user_id, title, content) VALUES (%s, %s, %s) "
    "RETURNING id, title, content, created_at, updated_at"
)

SELECT_NOTES = (
    "SELECT id, title, content, created_at, updated_at FROM notes "
    "WHERE user_id = %s ORDER BY updated_at DESC"
)

DELETE_NOTE = "DELETE FROM notes WHERE id = %s AND user_id = %s RETURNING id"


def create_note(pool, user_id, title, content=""):
    with checkout(pool) as conn:
        return conn.execute(INSERT_NOTE, (user_id, title, content)).fetchone()


def list_notes(pool, user_id):
    with checkout(pool) as conn:
        return conn.execute(SELECT_NOTES, (user_id,)).fetchall()


def delete_note(pool, note_id, user_id):
    """Return the deleted id, or None when the caller owns no such note."""
    with checkout(pool) as conn:
        row = conn.execute(DELETE_NOTE, (note_id, user_id)).fetchone()
    return row["id"] if row else None
