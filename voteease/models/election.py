from voteease.extensions import db
from voteease.utils import utcnow


class ElectionStatus:
    INACTIVE = "inactive"
    ACTIVE = "active"
    CLOSED = "closed"


class Election(db.Model):
    __tablename__ = "elections"

    id = db.Column(db.Integer, primary_key=True)
    status = db.Column(db.String(20), nullable=False, default=ElectionStatus.INACTIVE)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    started_at = db.Column(db.DateTime, nullable=True)
    ended_at = db.Column(db.DateTime, nullable=True)
    scheduled_end = db.Column(db.DateTime, nullable=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def is_active(self):
        return self.status == ElectionStatus.ACTIVE
