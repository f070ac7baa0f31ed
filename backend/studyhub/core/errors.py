"""Centralized JSON error handling rendering the response envelope."""

from __future__ import annotations

import logging
import traceback
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, current_app, jsonify
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from studyhub.core.logger import ensure_request_id
from studyhub.services._shared.errors import ServiceError

log = logging.getLogger(__name__)


def _flatten_messages(messages: Any, prefix: str = "") -> list[str]:
    """Flatten marshmallow's nested ``messages`` mapping into ``field: msg`` lines."""
    if isinstance(messages, dict):
        out: list[str] = []
        for key, value in messages.items():
            label = f"{prefix}.{key}" if prefix else str(key)
            out.extend(_flatten_messages(value, label))
        return out
    if isinstance(messages, (list, tuple)):
        out = []
        for item in messages:
            out.extend(_flatten_messages(item, prefix))
        return out
    return [f"{prefix}: {messages}" if prefix else str(messages)]


def error_envelope(
    *,
    status: int,
    message: str,
    errors: list[str] | None = None,
    exc: BaseException | None = None,
) -> dict[str, Any]:
    """
    Build the error envelope ``{statusCode, message, error, success}``.

    :param status: HTTP status code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional detail messages.
    :param exc: Exception whose traceback is attached as ``stack`` in debug mode.
    :returns: Envelope dictionary.
    :rtype: dict
    """
    body: dict[str, Any] = {
        "statusCode": int(status),
        "message": message,
        "error": list(errors or []),
        "success": False,
    }
    if exc is not None and current_app.debug:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def _envelope_response(body: dict[str, Any]) -> tuple[Response, int]:
    return jsonify(body), int(body["statusCode"])


class APIError(Exception):
    """
    Represent an HTTP error raised from the delivery layer.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : list[str] | None, optional
        Detail messages placed in the envelope's ``error`` list.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = list(errors or [])

    def to_envelope(self) -> dict[str, Any]:
        """Serialize the error into the response envelope."""
        return error_envelope(
            status=self.status_code, message=self.message, errors=self.errors, exc=self
        )


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a service-layer error to its HTTP representation.

    This is the single translation point between the service taxonomy and
    the API; handlers never catch and re-wrap service errors themselves.

    :param exc: Error raised within a service.
    :returns: Equivalent :class:`APIError`.
    """
    status = int(getattr(exc, "status_code", HTTPStatus.BAD_REQUEST))
    err = APIError(exc.message, status_code=status, errors=exc.errors)
    err.__cause__ = exc
    err.__traceback__ = exc.__traceback__
    return err


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every handled error uses the same envelope shape.
    - 5xx are logged with ``exc_info``; 4xx as warnings.
    """

    def _render(err: APIError, kind: str):
        level = log.error if err.status_code >= 500 else log.warning
        level(
            "%s: status=%s msg=%s request_id=%s",
            kind,
            err.status_code,
            err.message,
            ensure_request_id(),
            exc_info=err.status_code >= 500,
            extra={"status": err.status_code},
        )
        return _envelope_response(err.to_envelope())

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _render(err, "APIError")

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        return _render(translate_service_error(err), type(err).__name__)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        try:
            message = HTTPStatus(status).phrase
        except ValueError:
            message = "Error"
        details = [err.description.strip()] if err.description else []
        return _render(APIError(message, status_code=status, errors=details), "HTTPException")

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        errors = _flatten_messages(err.messages)
        return _render(APIError("Validation failed", status_code=400, errors=errors), "ValidationError")

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Raw DB errors never reach clients
        api_err = APIError("Resource conflict", status_code=HTTPStatus.CONFLICT)
        log.error("IntegrityError: request_id=%s", ensure_request_id(), exc_info=err)
        return _envelope_response(api_err.to_envelope())

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        api_err = APIError("Service temporarily unavailable", status_code=HTTPStatus.SERVICE_UNAVAILABLE)
        log.error("OperationalError: request_id=%s", ensure_request_id(), exc_info=err)
        return _envelope_response(api_err.to_envelope())

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=err)
        body = error_envelope(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            message="Internal Server Error",
            exc=err,
        )
        return _envelope_response(body)
