from voteease.serializers import candidate_payload
from voteease.services.election import get_election, remaining_time
from voteease.services.registry import list_candidates
from voteease.services.roll import count_voted, count_voters
from voteease.utils import isoformat, utcnow


def percentage(part, whole):
    return round(part / whole * 100, 1) if whole > 0 else 0.0


def tally_candidates(candidates):
    total_votes = sum(candidate.votes for candidate in candidates)
    max_votes = max((candidate.votes for candidate in candidates), default=0)

    # Ties go to the earliest registered candidate.
    winners = []
    if max_votes > 0:
        winners = sorted(
            (candidate for candidate in candidates if candidate.votes == max_votes),
            key=lambda candidate: candidate.id,
        )

    rows = [
        {
            "candidate": candidate,
            "votes": candidate.votes,
            "percentage": percentage(candidate.votes, total_votes),
        }
        for candidate in candidates
    ]
    rows.sort(key=lambda row: (-row["votes"], row["candidate"].id))

    return {
        "total_votes": total_votes,
        "rows": rows,
        "winner": winners[0] if winners else None,
        "winners": winners,
        "is_tie": len(winners) > 1,
        "top_vote_count": max_votes,
    }


def election_results(now=None):
    now = now or utcnow()
    election = get_election(now=now)
    tally = tally_candidates(list_candidates())
    total_voters = count_voters()

    candidates = []
    for row in tally["rows"]:
        payload = candidate_payload(row["candidate"], include_votes=True)
        payload["percentage"] = row["percentage"]
        candidates.append(payload)

    winner = tally["winner"]
    return {
        "candidates": candidates,
        "totalVotes": tally["total_votes"],
        "totalVoters": total_voters,
        "participationRate": percentage(tally["total_votes"], total_voters),
        "winner": candidate_payload(winner, include_votes=True) if winner else None,
        "isTie": tally["is_tie"],
        "tiedCandidates": (
            [candidate_payload(c, include_votes=True) for c in tally["winners"]]
            if tally["is_tie"]
            else []
        ),
        "isElectionActive": election.is_active,
        "lastUpdated": isoformat(now),
    }


def voting_stats(voter=None, now=None):
    now = now or utcnow()
    election = get_election(now=now)
    return {
        "totalVoters": count_voters(),
        "votedCount": count_voted(),
        "remainingTime": remaining_time(election, now),
        "userHasVoted": bool(voter is not None and voter.has_voted),
    }


def user_status(voter, now=None):
    now = now or utcnow()
    election = get_election(now=now)
    on_roll = not voter.is_admin
    return {
        "canVote": election.is_active and on_roll and not voter.has_voted,
        "hasVoted": bool(voter.has_voted),
        "timeRemaining": remaining_time(election, now),
        "isElectionActive": election.is_active,
    }
