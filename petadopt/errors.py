"""Error taxonomy shared by the catalog, the adoption workflow and the API.

Components raise these; ``register_error_handlers`` renders them as JSON so
that raw driver errors never reach a client.
"""
from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AdoptionServiceError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidArgument(AdoptionServiceError):
    status_code = 400
    message = "Invalid input"

    def __init__(self, message: str | None = None, fields: dict | None = None):
        super().__init__(message)
        self.fields = fields or {}

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.fields:
            body["fields"] = self.fields
        return body


class NotFound(AdoptionServiceError):
    status_code = 404
    message = "Pet not found"


class AlreadyAdopted(AdoptionServiceError):
    status_code = 409
    message = "Pet has already been adopted"


class TransactionFailed(AdoptionServiceError):
    status_code = 500
    message = "Failed to process adoption"


class StoreUnavailable(AdoptionServiceError):
    status_code = 500
    message = "Database operation failed"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AdoptionServiceError)
    def _handle_service_error(exc: AdoptionServiceError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.name}), exc.code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled error while serving request")
        return jsonify({"error": "Internal server error"}), 500
