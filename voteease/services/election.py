"""Election state machine.

The election is a single row that moves ``inactive -> active -> closed``;
a closed election can be resumed. Every write that touches the election
status or the tally holds ``election_lock`` and reads the row with
``SELECT ... FOR UPDATE``, so status changes act as a barrier against
in-flight vote submissions.
"""

import threading

from flask import current_app

from voteease.errors import (
    ElectionActive,
    ElectionNotActive,
    InvalidTransition,
    ValidationError,
)
from voteease.extensions import db
from voteease.models import Election, ElectionStatus
from voteease.utils import parse_iso_datetime, utcnow

election_lock = threading.RLock()


def get_election(lock=False, now=None, close_expired=True):
    query = Election.query.order_by(Election.id)
    if lock:
        query = query.with_for_update()

    election = query.first()
    if election is None:
        election = _create_election()

    if close_expired:
        close_if_past_deadline(election, now or utcnow())
    return election


def _create_election():
    with election_lock:
        election = Election.query.order_by(Election.id).first()
        if election is not None:
            return election

        election = Election(
            status=ElectionStatus.INACTIVE,
            title=current_app.config["ELECTION_TITLE"],
            description=current_app.config["ELECTION_DESCRIPTION"],
        )
        db.session.add(election)
        db.session.commit()
        current_app.logger.info("Created election record %r", election.title)
        return election


def _past_deadline(election, now):
    return (
        election.is_active
        and election.scheduled_end is not None
        and election.scheduled_end <= now
    )


def close_if_past_deadline(election, now):
    if not _past_deadline(election, now):
        return False

    with election_lock:
        # The row may have been reset or closed since it was read.
        db.session.refresh(election, with_for_update=True)
        if not _past_deadline(election, now):
            return False

        election.status = ElectionStatus.CLOSED
        election.ended_at = election.scheduled_end
        db.session.commit()

    current_app.logger.info("Election closed at its scheduled end %s", election.ended_at)
    return True


def start_election(now=None):
    now = now or utcnow()
    with election_lock:
        election = get_election(lock=True, now=now)
        if election.is_active:
            raise InvalidTransition("The election is already active.")
        if election.scheduled_end is not None and election.scheduled_end <= now:
            raise InvalidTransition(
                "The scheduled end date has passed. Set a new end date first."
            )

        if election.started_at is None:
            election.started_at = now
        election.status = ElectionStatus.ACTIVE
        election.ended_at = None
        db.session.commit()

    current_app.logger.info("Election %r started", election.title)
    return election


def close_election(now=None):
    now = now or utcnow()
    with election_lock:
        election = get_election(lock=True, now=now)
        if not election.is_active:
            raise InvalidTransition("Only an active election can be closed.")

        election.status = ElectionStatus.CLOSED
        election.ended_at = now
        db.session.commit()

    current_app.logger.info("Election %r closed", election.title)
    return election


def update_election_details(data, now=None):
    now = now or utcnow()
    invalid = []
    changes = {}

    if "title" in data:
        title = data.get("title")
        title = title.strip() if isinstance(title, str) else ""
        if title:
            changes["title"] = title
        else:
            invalid.append("title")

    if "description" in data:
        description = data.get("description")
        changes["description"] = (
            description.strip() if isinstance(description, str) else None
        ) or None

    if "endDate" in data:
        raw_end = data.get("endDate")
        if raw_end in (None, ""):
            changes["scheduled_end"] = None
        else:
            try:
                scheduled_end = parse_iso_datetime(str(raw_end))
            except ValueError:
                scheduled_end = None
            if scheduled_end is None or scheduled_end <= now:
                invalid.append("endDate")
            else:
                changes["scheduled_end"] = scheduled_end

    if invalid:
        raise ValidationError(invalid)
    if not changes:
        raise ValidationError(
            ["title", "description", "endDate"],
            "Provide at least one election field to update.",
        )

    with election_lock:
        election = get_election(lock=True, now=now)
        for field, value in changes.items():
            setattr(election, field, value)
        db.session.commit()

    current_app.logger.info("Election details updated: %s", ", ".join(sorted(changes)))
    return election


def ensure_voting_open(election):
    if not election.is_active:
        raise ElectionNotActive()


def ensure_editable(election):
    if election.is_active:
        raise ElectionActive()


def remaining_time(election, now=None):
    if not election.is_active or election.scheduled_end is None:
        return None
    return format_duration(election.scheduled_end - (now or utcnow()))


def format_duration(delta):
    total_minutes = max(int(delta.total_seconds() // 60), 0)
    days, minutes_left = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(minutes_left, 60)

    parts = []
    if days:
        parts.append(_plural(days, "day"))
    if hours:
        parts.append(_plural(hours, "hour"))
    if not days and (minutes or not parts):
        parts.append(_plural(minutes, "minute"))
    return ", ".join(parts)


def _plural(count, unit):
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
