import logging
from werkzeug.exceptions import HTTPException
from . import errors_bp as api
from plansync.core.errors import SyncInProgressError, ValidationError
from plansync.extensions import apifairy

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str) -> dict:
    return {"data": None, "error": {"code": code, "message": message}}


def _flatten_messages(messages: dict) -> str:
    """
    Turns webargs messages ({"query": {"starts_at": ["..."]}}) into
    "starts_at: ..." fragments.
    """
    fragments = []
    for field_errors in messages.values():
        if not isinstance(field_errors, dict):
            fragments.append(str(field_errors))
            continue
        for field, errors in field_errors.items():
            if isinstance(errors, (list, tuple)):
                errors = " ".join(str(error) for error in errors)
            fragments.append(f"{field}: {errors}")
    return "; ".join(fragments)


@apifairy.error_handler
def handle_argument_error(status_code, messages):
    return _error_body("validation_error", _flatten_messages(messages)), status_code


@api.app_errorhandler(ValidationError)
def handle_validation_error(error: ValidationError):
    # Bad client input, not a server fault
    logger.info(f"Rejected search request: {error}")
    return _error_body("validation_error", str(error)), 400


@api.app_errorhandler(SyncInProgressError)
def handle_sync_in_progress(error: SyncInProgressError):
    return _error_body("sync_in_progress", str(error)), 409


@api.app_errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    if isinstance(error, HTTPException):
        return _error_body(error.name.lower().replace(" ", "_"), error.description), error.code

    logger.error(f"Unhandled error occurred: {error}", exc_info=error)
    return _error_body("internal_error", "Something went wrong on our end"), 500
