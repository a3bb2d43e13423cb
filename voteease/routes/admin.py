from functools import wraps

from flask import abort, jsonify
from flask_login import current_user, login_required

from voteease.serializers import candidate_payload, election_payload, voter_payload
from voteease.services.admin import admin_stats, reset_election, toggle_election
from voteease.services.election import update_election_details
from voteease.services.registry import (
    add_candidate,
    delete_candidate,
    list_candidates,
    update_candidate,
)
from voteease.services.roll import list_voters
from voteease.utils import json_body


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_admin:
            abort(403, description="Administrator access is required.")
        return view(*args, **kwargs)

    return wrapped


def register_admin_routes(app):
    @app.route("/api/admin/stats")
    @admin_required
    def admin_dashboard_stats():
        return jsonify(admin_stats())

    @app.route("/api/admin/candidates")
    @admin_required
    def admin_candidates():
        return jsonify(
            {
                "candidates": [
                    candidate_payload(c, include_votes=True) for c in list_candidates()
                ]
            }
        )

    @app.route("/api/admin/candidates", methods=["POST"])
    @admin_required
    def create_candidate():
        candidate = add_candidate(json_body())
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Candidate added successfully",
                    "candidate": candidate_payload(candidate, include_votes=True),
                }
            ),
            201,
        )

    @app.route("/api/admin/candidates/<int:candidate_id>", methods=["PUT"])
    @admin_required
    def edit_candidate(candidate_id):
        candidate = update_candidate(candidate_id, json_body())
        return jsonify(
            {
                "success": True,
                "message": "Candidate updated successfully",
                "candidate": candidate_payload(candidate, include_votes=True),
            }
        )

    @app.route("/api/admin/candidates/<int:candidate_id>", methods=["DELETE"])
    @admin_required
    def remove_candidate(candidate_id):
        delete_candidate(candidate_id)
        return jsonify({"success": True, "message": "Candidate deleted successfully"})

    @app.route("/api/admin/voters")
    @admin_required
    def voters():
        return jsonify({"voters": [voter_payload(v) for v in list_voters()]})

    @app.route("/api/admin/election", methods=["PUT"])
    @admin_required
    def edit_election():
        election = update_election_details(json_body())
        return jsonify(
            {
                "success": True,
                "message": "Election details updated successfully",
                "election": election_payload(election),
            }
        )

    @app.route("/api/admin/election/toggle", methods=["POST"])
    @admin_required
    def toggle():
        election = toggle_election()
        return jsonify(
            {
                "success": True,
                "message": "Election status updated successfully",
                "status": election.status,
            }
        )

    @app.route("/api/admin/election/reset", methods=["POST"])
    @admin_required
    def reset():
        reset_election()
        return jsonify({"success": True, "message": "Election reset successfully"})
