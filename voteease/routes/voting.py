from flask import jsonify
from flask_login import current_user, login_required

from voteease.errors import ValidationError
from voteease.serializers import candidate_payload, election_payload
from voteease.services.election import get_election
from voteease.services.registry import list_candidates
from voteease.services.results import election_results, user_status, voting_stats
from voteease.services.tally import submit_vote
from voteease.utils import isoformat, json_body, parse_id


def register_voting_routes(app):
    @app.route("/api/voting/status")
    @login_required
    def election_status():
        return jsonify(election_payload(get_election()))

    @app.route("/api/voting/stats")
    @login_required
    def election_stats():
        return jsonify(voting_stats(current_user))

    @app.route("/api/voting/candidates")
    @login_required
    def candidates():
        return jsonify(
            {"candidates": [candidate_payload(c) for c in list_candidates()]}
        )

    @app.route("/api/voting/user-status")
    @login_required
    def voting_user_status():
        return jsonify(user_status(current_user))

    @app.route("/api/voting/vote", methods=["POST"])
    @login_required
    def vote():
        data = json_body()
        raw_candidate_id = data.get("candidateId")
        if raw_candidate_id is None or str(raw_candidate_id).strip() == "":
            raise ValidationError(["candidateId"])

        receipt = submit_vote(current_user.id, parse_id(raw_candidate_id))
        return jsonify(
            {
                "success": True,
                "message": "Vote submitted successfully",
                "receipt": {
                    "id": receipt.receipt_id,
                    "castAt": isoformat(receipt.cast_at),
                },
            }
        )

    @app.route("/api/voting/results")
    @login_required
    def results():
        return jsonify(election_results())
