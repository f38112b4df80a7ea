"""
Notes Local Toolkit
===================
Developer helpers for running the notes Lambda handlers outside AWS:
  1. Building API Gateway proxy events for each handler
  2. Invoking a handler against an event file
  3. A local HTTP server that forwards requests to the handlers

The handlers still need a reachable database and the DB_SECRET_ARN secret
(set AWS_PROFILE / AWS_REGION as usual).

Dependencies (install via pip):
  flask>=3.0.0
  pyyaml>=6.0.0

Example usage:
  # Write a create-note event for user "alice"
  python notes_local.py event create --user alice --title "Groceries" create.yaml

  # Run the create handler against it
  python notes_local.py invoke create create.yaml

  # Run the API on localhost:8080
  python notes_local.py serve --port 8080
  curl -X POST -H "X-Dev-User: alice" -d '{"title": "hi"}' http://localhost:8080/notes
"""
from __future__ import annotations

import argparse
import importlib.util
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

LAMBDA_DIR = Path(__file__).resolve().parent.parent / "notes-aws-lab" / "app" / "lambdas"
OPERATIONS = {
    "create": ("create_note", "POST"),
    "list": ("list_notes", "GET"),
    "delete": ("delete_note", "DELETE"),
}
DEV_USER_HEADER = "X-Dev-User"

_handlers: Dict[str, Any] = {}


def load_handler(operation: str):
    """Load a handler module by path; every Lambda's file is named handler.py."""
    if operation not in _handlers:
        directory, _ = OPERATIONS[operation]
        spec = importlib.util.spec_from_file_location(
            f"{directory}_handler", LAMBDA_DIR / directory / "handler.py"
        )
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        _handlers[operation] = module
    return _handlers[operation]


# ---------------------------
# Event Helpers
# ---------------------------

def build_event(
    operation: str,
    user: Optional[str] = None,
    body: Optional[Dict[str, Any]] = None,
    note_id: Optional[str] = None,
) -> Dict[str, Any]:
    _, method = OPERATIONS[operation]
    path = f"/notes/{note_id}" if note_id else "/notes"
    authorizer = {"claims": {"sub": user}} if user else {}
    return {
        "resource": "/notes/{id}" if note_id else "/notes",
        "path": path,
        "httpMethod": method,
        "requestContext": {"authorizer": authorizer, "httpMethod": method, "path": path},
        "pathParameters": {"id": note_id} if note_id else None,
        "body": json.dumps(body) if body is not None else None,
        "isBase64Encoded": False,
    }


def load_event(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            return yaml.safe_load(f) or {}
        return json.load(f)


def invoke(operation: str, event: Dict[str, Any]) -> Dict[str, Any]:
    return load_handler(operation).lambda_handler(event, None)


# ---------------------------
# Local Server
# ---------------------------

def create_app():
    from flask import Flask, Response, request

    app = Flask(__name__)

    def forward(operation, note_id=None):
        event = build_event(operation, request.headers.get(DEV_USER_HEADER), note_id=note_id)
        event["body"] = request.get_data(as_text=True) or None
        result = invoke(operation, event)
        return Response(result["body"], status=result["statusCode"], headers=result["headers"])

    @app.route("/notes", methods=["POST"])
    def create():
        return forward("create")

    @app.route("/notes", methods=["GET"])
    def list_():
        return forward("list")

    @app.route("/notes/<note_id>", methods=["DELETE"])
    def delete(note_id):
        return forward("delete", note_id)

    return app


def run_server(host: str, port: int):
    app = create_app()
    print(f"[*] Notes API listening on http://{host}:{port} (identity from {DEV_USER_HEADER})")
    app.run(host=host, port=port, threaded=True)


# ---------------------------
# CLI Interface
# ---------------------------

def cli(argv=None):
    parser = argparse.ArgumentParser(description="Notes local toolkit")
    sub = parser.add_subparsers(dest="command", required=True)

    # event
    e = sub.add_parser("event", help="Write an API Gateway event for a handler")
    e.add_argument("operation", choices=sorted(OPERATIONS))
    e.add_argument("output", help="Path to output YAML/JSON event file")
    e.add_argument("--user", help="Cognito sub claim (omit for an unauthenticated event)")
    e.add_argument("--title")
    e.add_argument("--content")
    e.add_argument("--id", dest="note_id", help="Note id (delete only)")

    # invoke
    i = sub.add_parser("invoke", help="Run a handler against an event file")
    i.add_argument("operation", choices=sorted(OPERATIONS))
    i.add_argument("input", help="Path to event YAML/JSON file")

    # serve
    s = sub.add_parser("serve", help="Run the handlers behind a local HTTP server")
    s.add_argument("--host", default="127.0.0.1", help="Bind address (default 127.0.0.1)")
    s.add_argument("--port", default=8080, type=int, help="Port (default 8080)")

    args = parser.parse_args(argv)

    if args.command == "event":
        body = None
        if args.operation == "create":
            body = {k: v for k, v in (("title", args.title), ("content", args.content)) if v is not None}
        event = build_event(args.operation, args.user, body, args.note_id)
        with open(args.output, "w", encoding="utf-8") as out:
            if args.output.endswith((".yaml", ".yml")):
                yaml.safe_dump(event, out, sort_keys=False)
            else:
                json.dump(event, out, indent=2)
        print(f"[*] {args.operation} event written to {args.output}")

    elif args.command == "invoke":
        result = invoke(args.operation, load_event(args.input))
        print(json.dumps({**result, "body": json.loads(result["body"])}, indent=2))
        if result["statusCode"] >= 500:
            sys.exit(1)

    elif args.command == "serve":
        run_server(args.host, args.port)


if __name__ == "__main__":
    cli()
