"""HTTP routes, dependency wiring and the server entry point."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional, Sequence

from flask import Flask, jsonify, request
from sqlalchemy.engine import Engine

from .config import LOGGER_NAME, DatabaseConnectionError, connect_to_db, init_log
from .repository import RoleRepository, UserRepository
from .responses import ApiError, ApiResponse
from .service import DEFAULT_BCRYPT_ROUNDS, UserService

log = logging.getLogger(LOGGER_NAME)

_DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Container:
    """The application's wired components."""

    user_repository: UserRepository
    user_service: UserService
    role_repository: RoleRepository


def build_container(
    engine: Optional[Engine] = None, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
) -> Container:
    """Wire repositories and the service; connects via ``DB_DSN`` when no engine is given."""
    if engine is None:
        engine = connect_to_db()
    user_repository = UserRepository(engine)
    return Container(
        user_repository=user_repository,
        user_service=UserService(user_repository, bcrypt_rounds=bcrypt_rounds),
        role_repository=RoleRepository(engine),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Flask application serving the ``/api/user`` routes."""
    if container is None:
        container = build_container()
    service = container.user_service
    app = Flask(__name__)

    def reply(response: ApiResponse[Any]):
        return jsonify(response.to_dict()), HTTPStatus.OK

    def body() -> Any:
        return request.get_json(force=True, silent=True)

    @app.errorhandler(ApiError)
    def api_error(error: ApiError):
        return jsonify(error.to_response().to_dict()), error.http_status()

    @app.get("/api/user")
    def get_all_user_data():
        return reply(service.get_all_users())

    @app.post("/api/user")
    def add_user_data():
        return reply(service.add_user(body()))

    @app.get("/api/user/<user_id>")
    def get_user_by_id(user_id: str):
        return reply(service.get_user_by_id(user_id))

    @app.put("/api/user/<user_id>")
    def update_user_data(user_id: str):
        return reply(service.update_user(user_id, body()))

    @app.delete("/api/user/<user_id>")
    def delete_user(user_id: str):
        return reply(service.delete_user(user_id))

    return app


def _env_port() -> int:
    raw = os.environ.get("PORT", "")
    return int(raw) if raw.isdigit() else _DEFAULT_PORT


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the API server; returns a non-zero status if the database is unreachable."""
    init_log()
    parser = argparse.ArgumentParser(prog="scalable-api", description="Run the user API server.")
    parser.add_argument("--host", default="0.0.0.0", help="interface to listen on")
    parser.add_argument("--port", type=int, default=None, help="port (default: $PORT)")
    args = parser.parse_args(argv)
    port = args.port if args.port is not None else _env_port()
    try:
        container = build_container()
    except DatabaseConnectionError as exc:
        log.error("%s", exc)
        return 1
    create_app(container).run(host=args.host, port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())