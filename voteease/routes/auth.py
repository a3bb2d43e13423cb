from flask import current_app, jsonify
from flask_login import current_user, login_required, login_user, logout_user

from voteease.serializers import account_payload
from voteease.services.roll import authenticate, register_voter
from voteease.utils import json_body


def register_auth_routes(app):
    @app.route("/api/auth/register", methods=["POST"])
    def register():
        data = json_body()
        voter = register_voter(data.get("name"), data.get("email"), data.get("password"))
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Account created successfully! Please log in.",
                    "user": account_payload(voter),
                }
            ),
            201,
        )

    @app.route("/api/auth/login", methods=["POST"])
    def login():
        data = json_body()
        account = authenticate(data.get("email"), data.get("password"))
        if account is None:
            current_app.logger.warning("Failed login for %s", data.get("email"))
            return (
                jsonify(
                    {
                        "success": False,
                        "error": "InvalidCredentials",
                        "message": "Invalid email or password.",
                    }
                ),
                401,
            )

        login_user(account, remember=bool(data.get("remember")))
        return jsonify(
            {
                "success": True,
                "message": "Logged in successfully.",
                "user": account_payload(account),
            }
        )

    @app.route("/api/auth/logout", methods=["POST"])
    @login_required
    def logout():
        logout_user()
        return jsonify({"success": True, "message": "Logged out."})

    @app.route("/api/auth/me")
    @login_required
    def me():
        return jsonify({"user": account_payload(current_user)})
