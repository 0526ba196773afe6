# staycore_backend/errors.py
from flask import jsonify


class StayCoreError(Exception):
    """Base for errors reported back to the caller as JSON."""

    code = "error"
    status_code = 500

    def __init__(self, code=None, message=None, details=None):
        super().__init__(message or code or self.code)
        if code:
            self.code = code
        self.message = message or self.code
        self.details = details or {}

    def to_dict(self):
        body = {"error": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(StayCoreError):
    """Input the caller has to correct, e.g. ValidationError("notes_required")."""

    code = "validation_error"
    status_code = 400

    def __init__(self, code="validation_error", message=None, field=None):
        details = {"field": field} if field else None
        super().__init__(code, message, details)
        self.field = field


class AuthError(StayCoreError):
    code = "unauthorized"
    status_code = 401

    def __init__(self, code="unauthorized", message=None):
        super().__init__(code, message)
        if code == "forbidden":
            self.status_code = 403


class NotFoundError(StayCoreError):
    code = "not_found"
    status_code = 404

    def __init__(self, resource, resource_id=None):
        message = f"{resource} {resource_id} not found" if resource_id is not None else f"{resource} not found"
        super().__init__("not_found", message, {"resource": resource, "id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


class PartialFailure(StayCoreError):
    """One half of a two-entity write succeeded and the other did not.

    `completed` and `failed` name the halves; `retry` describes the
    compensating action the caller can submit to finish the operation.
    """

    code = "partial_failure"
    status_code = 207

    def __init__(self, completed, failed, retry, message=None, result=None):
        super().__init__(
            "partial_failure",
            message or f"{completed} succeeded but {failed} failed",
            {"completed": completed, "failed": failed, "retry": retry},
        )
        self.completed = completed
        self.failed = failed
        self.retry = retry
        self.result = result

    def to_dict(self):
        body = super().to_dict()
        if self.result is not None:
            body["result"] = self.result
        return body


def register_error_handlers(app):
    @app.errorhandler(StayCoreError)
    def handle_staycore_error(e):
        if isinstance(e, PartialFailure):
            app.logger.error("Partial failure: %s", e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify(error="bad_request", message=getattr(e, "description", "Bad Request")), 400

    @app.errorhandler(401)
    def unauthorized(e): return jsonify(error="unauthorized"), 401

    @app.errorhandler(403)
    def forbidden(e): return jsonify(error="forbidden"), 403

    @app.errorhandler(404)
    def not_found(e): return jsonify(error="not_found"), 404

    @app.errorhandler(405)
    def method_not_allowed(e): return jsonify(error="method_not_allowed"), 405

    @app.errorhandler(422)
    def unprocessable(e): return jsonify(error="unprocessable"), 422

    @app.errorhandler(500)
    def server_error(e):
        app.logger.exception("Unhandled exception: %s", e)
        return jsonify(error="server_error"), 500
