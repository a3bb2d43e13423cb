from flask import current_app

from voteease.extensions import db
from voteease.models import Candidate, ElectionStatus, Voter
from voteease.services.election import (
    close_election,
    close_if_past_deadline,
    election_lock,
    get_election,
    start_election,
)
from voteease.services.results import percentage
from voteease.services.roll import count_voters
from voteease.services.tally import total_votes
from voteease.utils import utcnow


def toggle_election(now=None):
    now = now or utcnow()
    with election_lock:
        election = get_election(lock=True, now=now, close_expired=False)
        if not election.is_active:
            return start_election(now=now)
        # An expired election is already closed by its deadline.
        if close_if_past_deadline(election, now):
            return election
        return close_election(now=now)


def reset_election():
    """Zero the tally and reopen the roll in one transaction.

    Counts and has_voted flags are cleared together or not at all, and the
    election drops back to ``inactive`` with its timestamps cleared.
    """
    with election_lock:
        try:
            election = get_election(lock=True)
            Candidate.query.update({"votes": 0}, synchronize_session=False)
            Voter.query.filter_by(has_voted=True).update(
                {"has_voted": False}, synchronize_session=False
            )
            election.status = ElectionStatus.INACTIVE
            election.started_at = None
            election.ended_at = None
            election.scheduled_end = None
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    current_app.logger.warning("Election %r reset; all votes cleared", election.title)
    return election


def admin_stats():
    election = get_election()
    votes = total_votes()
    voters = count_voters()
    return {
        "totalVoters": voters,
        "totalCandidates": Candidate.query.count(),
        "totalVotes": votes,
        "electionStatus": election.status,
        "participationRate": percentage(votes, voters),
    }
