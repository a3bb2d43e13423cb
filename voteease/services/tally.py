"""Vote submission.

Only two facts survive a vote: the voter's has_voted flag and the
candidate's counter. No voter-to-candidate link is written anywhere,
including the receipt and the logs.
"""

from collections import namedtuple

from flask import current_app
from sqlalchemy import func

from voteease.errors import UnknownCandidate
from voteease.extensions import db
from voteease.models import Candidate
from voteease.services.election import election_lock, ensure_voting_open, get_election
from voteease.services.roll import count_voted, mark_voted
from voteease.services.security import generate_receipt_id
from voteease.utils import id_in_range, utcnow

Receipt = namedtuple("Receipt", ["receipt_id", "cast_at"])
TallyCheck = namedtuple("TallyCheck", ["total_votes", "voted_count", "consistent"])


def submit_vote(voter_id, candidate_id):
    with election_lock:
        try:
            ensure_voting_open(get_election(lock=True))

            if (
                candidate_id is None
                or not id_in_range(candidate_id)
                or Candidate.query.filter_by(id=candidate_id).first() is None
            ):
                raise UnknownCandidate()

            mark_voted(voter_id)
            Candidate.query.filter_by(id=candidate_id).update(
                {"votes": Candidate.votes + 1}, synchronize_session=False
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    current_app.logger.info("Ballot accepted from voter %s", voter_id)
    return Receipt(receipt_id=generate_receipt_id(), cast_at=utcnow())


def total_votes():
    return db.session.query(func.coalesce(func.sum(Candidate.votes), 0)).scalar()


def check_integrity():
    votes = total_votes()
    voted = count_voted()
    return TallyCheck(total_votes=votes, voted_count=voted, consistent=votes == voted)
