from voteease.routes.admin import register_admin_routes
from voteease.routes.auth import register_auth_routes
from voteease.routes.voting import register_voting_routes


def register_routes(app):
    register_auth_routes(app)
    register_voting_routes(app)
    register_admin_routes(app)
