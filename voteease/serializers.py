from voteease.utils import isoformat


def candidate_payload(candidate, include_votes=False):
    payload = {
        "_id": str(candidate.id),
        "name": candidate.name,
        "party": candidate.party,
        "symbol": candidate.symbol,
        "description": candidate.description,
        "color": candidate.color,
    }
    if include_votes:
        payload["votes"] = candidate.votes
    return payload


def voter_payload(voter):
    return {
        "_id": str(voter.id),
        "name": voter.name,
        "email": voter.email,
        "hasVoted": bool(voter.has_voted),
        "registeredAt": isoformat(voter.registered_at),
    }


def account_payload(account):
    payload = voter_payload(account)
    payload["isAdmin"] = bool(account.is_admin)
    return payload


def election_payload(election):
    return {
        "isActive": election.is_active,
        "status": election.status,
        "startDate": isoformat(election.started_at),
        "endDate": isoformat(election.ended_at or election.scheduled_end),
        "title": election.title,
        "description": election.description,
    }
