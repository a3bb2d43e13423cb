from flask_login import UserMixin

from voteease.extensions import db
from voteease.utils import utcnow


class Voter(UserMixin, db.Model):
    __tablename__ = "voters"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    # Admin accounts manage the election but are not on the voter roll.
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    has_voted = db.Column(db.Boolean, nullable=False, default=False)
    registered_at = db.Column(db.DateTime, nullable=False, default=utcnow)
