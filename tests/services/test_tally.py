import threading

import pytest

from voteease.errors import AlreadyVoted, ElectionNotActive, UnknownCandidate, UnknownVoter
from voteease.extensions import db
from voteease.models import Candidate, Voter
from voteease.services.admin import reset_election
from voteease.services.election import close_election, start_election
from voteease.services.tally import check_integrity, submit_vote


def _votes(candidate_id):
    return Candidate.query.filter_by(id=candidate_id).one().votes


def test_submit_vote_marks_voter_and_increments_once(db_session, voter, candidates, active_election):
    receipt = submit_vote(voter.id, candidates[1].id)

    assert len(receipt.receipt_id) == 12
    assert receipt.cast_at is not None
    assert db.session.get(Voter, voter.id).has_voted is True
    assert [_votes(c.id) for c in candidates] == [0, 1, 0]
    assert check_integrity().consistent


def test_second_vote_is_rejected(db_session, voter, candidates, active_election):
    submit_vote(voter.id, candidates[0].id)

    with pytest.raises(AlreadyVoted):
        submit_vote(voter.id, candidates[1].id)

    assert [_votes(c.id) for c in candidates] == [1, 0, 0]


@pytest.mark.parametrize("status", ["inactive", "closed"])
def test_vote_outside_active_election_changes_nothing(db_session, voter, candidates, status):
    if status == "closed":
        start_election()
        close_election()

    with pytest.raises(ElectionNotActive):
        submit_vote(voter.id, candidates[0].id)

    assert db.session.get(Voter, voter.id).has_voted is False
    assert sum(_votes(c.id) for c in candidates) == 0


def test_checks_run_in_order(db_session, voter, candidates):
    # Election state is checked before the candidate, the candidate before the voter.
    with pytest.raises(ElectionNotActive):
        submit_vote(424242, 424242)

    start_election()
    with pytest.raises(UnknownCandidate):
        submit_vote(424242, 424242)
    with pytest.raises(UnknownCandidate):
        submit_vote(voter.id, None)
    with pytest.raises(UnknownVoter):
        submit_vote(424242, candidates[0].id)

    assert sum(_votes(c.id) for c in candidates) == 0


def test_admin_cannot_vote(db_session, admin_user, candidates, active_election):
    with pytest.raises(UnknownVoter):
        submit_vote(admin_user.id, candidates[0].id)

    assert _votes(candidates[0].id) == 0


def test_candidate_id_outside_integer_range_is_unknown(db_session, voter, candidates, active_election):
    with pytest.raises(UnknownCandidate):
        submit_vote(voter.id, 10**23)

    assert db.session.get(Voter, voter.id).has_voted is False


def test_concurrent_votes_for_same_voter_succeed_once(app, db_session, voter, candidates, active_election):
    voter_id = voter.id
    candidate_ids = [c.id for c in candidates]
    outcomes = []
    barrier = threading.Barrier(8)

    def cast(index):
        with app.app_context():
            barrier.wait()
            try:
                submit_vote(voter_id, candidate_ids[index % len(candidate_ids)])
                outcomes.append("accepted")
            except AlreadyVoted:
                outcomes.append("already-voted")
            finally:
                db.session.remove()

    threads = [threading.Thread(target=cast, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("accepted") == 1
    assert outcomes.count("already-voted") == 7
    check = check_integrity()
    assert check.total_votes == 1
    assert check.consistent


def test_reset_interleaved_with_votes_keeps_tally_consistent(app, db_session, make_voter, candidates, active_election):
    voter_ids = [make_voter(f"Voter {i}").id for i in range(10)]
    candidate_ids = [c.id for c in candidates]
    barrier = threading.Barrier(len(voter_ids) + 1)
    errors = []

    def cast(voter_id, candidate_id):
        with app.app_context():
            barrier.wait()
            try:
                submit_vote(voter_id, candidate_id)
            except ElectionNotActive:
                pass
            except Exception as exc:
                errors.append(exc)
            finally:
                db.session.remove()

    def reset():
        with app.app_context():
            barrier.wait()
            try:
                reset_election()
            finally:
                db.session.remove()

    threads = [
        threading.Thread(target=cast, args=(voter_id, candidate_ids[i % 3]))
        for i, voter_id in enumerate(voter_ids)
    ]
    threads.append(threading.Thread(target=reset))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    db.session.expire_all()
    assert check_integrity().consistent
