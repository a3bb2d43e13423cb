from flask import current_app

from voteease.errors import CandidateHasVotes, NotFound, ValidationError
from voteease.extensions import db
from voteease.models import Candidate
from voteease.services.election import election_lock, ensure_editable, get_election
from voteease.utils import id_in_range

CANDIDATE_FIELDS = ("name", "party", "symbol", "description", "color")


def _clean_fields(data, partial=False):
    cleaned = {}
    missing = []

    for field in CANDIDATE_FIELDS:
        if partial and field not in data:
            continue
        value = data.get(field)
        value = value.strip() if isinstance(value, str) else ""
        if value:
            cleaned[field] = value
        else:
            missing.append(field)

    if missing:
        raise ValidationError(missing)
    if not cleaned:
        raise ValidationError(
            CANDIDATE_FIELDS, "Provide at least one candidate field to update."
        )
    return cleaned


def list_candidates():
    return Candidate.query.order_by(Candidate.id).all()


def get_candidate(candidate_id):
    candidate = None
    if candidate_id is not None and id_in_range(candidate_id):
        candidate = Candidate.query.filter_by(id=candidate_id).first()
    if candidate is None:
        raise NotFound("Candidate not found.")
    return candidate


def add_candidate(data):
    with election_lock:
        try:
            ensure_editable(get_election(lock=True))
            fields = _clean_fields(data)

            candidate = Candidate(votes=0, **fields)
            db.session.add(candidate)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    current_app.logger.info("Candidate %s added: %s", candidate.id, candidate.name)
    return candidate


def update_candidate(candidate_id, data):
    with election_lock:
        try:
            candidate = get_candidate(candidate_id)
            ensure_editable(get_election(lock=True))
            fields = _clean_fields(data, partial=True)

            for field, value in fields.items():
                setattr(candidate, field, value)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    current_app.logger.info(
        "Candidate %s updated: %s", candidate.id, ", ".join(sorted(fields))
    )
    return candidate


def delete_candidate(candidate_id):
    with election_lock:
        try:
            candidate = get_candidate(candidate_id)
            ensure_editable(get_election(lock=True))
            if candidate.votes > 0:
                raise CandidateHasVotes()

            db.session.delete(candidate)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    current_app.logger.info("Candidate %s deleted", candidate_id)
