from voteease.extensions import db
from voteease.utils import utcnow


class Candidate(db.Model):
    __tablename__ = "candidates"
    __table_args__ = (
        db.CheckConstraint("votes >= 0", name="ck_candidates_votes_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    party = db.Column(db.String(200), nullable=False)
    symbol = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=False)
    color = db.Column(db.String(20), nullable=False)
    votes = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
