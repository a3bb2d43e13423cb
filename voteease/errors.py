from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from voteease.extensions import db


class VoteEaseError(Exception):
    """Base class for failures reported back to the caller as JSON."""

    status_code = 400
    kind = "VoteEaseError"
    default_message = "The request could not be completed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"success": False, "error": self.kind, "message": self.message}


class ValidationError(VoteEaseError):
    kind = "ValidationError"

    def __init__(self, fields, message=None):
        self.fields = list(fields)
        super().__init__(
            message or f"Missing or invalid fields: {', '.join(self.fields)}."
        )

    def to_dict(self):
        payload = super().to_dict()
        payload["fields"] = self.fields
        return payload


class NotFound(VoteEaseError):
    status_code = 404
    kind = "NotFound"
    default_message = "The requested record does not exist."


class UnknownCandidate(NotFound):
    kind = "UnknownCandidate"
    default_message = "The selected candidate does not exist."


class UnknownVoter(NotFound):
    kind = "UnknownVoter"
    default_message = "This account is not on the voter roll."


class AlreadyVoted(VoteEaseError):
    status_code = 409
    kind = "AlreadyVoted"
    default_message = "You have already voted in this election."


class ElectionNotActive(VoteEaseError):
    status_code = 409
    kind = "ElectionNotActive"
    default_message = "Voting is not open for this election."


class DuplicateEmail(VoteEaseError):
    status_code = 409
    kind = "DuplicateEmail"
    default_message = "An account with this email is already registered."


class ElectionActive(VoteEaseError):
    status_code = 409
    kind = "ElectionActive"
    default_message = "Candidates cannot be changed while the election is active."


class CandidateHasVotes(VoteEaseError):
    status_code = 409
    kind = "CandidateHasVotes"
    default_message = "Candidates holding votes can only be deleted after a reset."


class InvalidTransition(VoteEaseError):
    status_code = 409
    kind = "InvalidTransition"
    default_message = "The election cannot move to the requested state."


def register_error_handlers(app):
    @app.errorhandler(VoteEaseError)
    def handle_vote_ease_error(error):
        current_app.logger.warning("%s: %s", error.kind, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception("Database error while handling request")
        return (
            jsonify(
                {
                    "success": False,
                    "error": "ServerError",
                    "message": "An unexpected error occurred. Please try again later.",
                }
            ),
            500,
        )

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return (
            jsonify(
                {
                    "success": False,
                    "error": error.name.replace(" ", ""),
                    "message": error.description,
                }
            ),
            error.code,
        )
