from flask import current_app
from sqlalchemy.exc import IntegrityError

from voteease.errors import AlreadyVoted, DuplicateEmail, UnknownVoter, ValidationError
from voteease.extensions import db
from voteease.models import Voter
from voteease.services.security import hash_password, verify_password

MIN_PASSWORD_LENGTH = 8


def normalize_email(email):
    return email.strip().lower() if isinstance(email, str) else ""


def _validate_account(name, email, password):
    name = name.strip() if isinstance(name, str) else ""
    email = normalize_email(email)
    password = password if isinstance(password, str) else ""

    missing = [
        field
        for field, value in (("name", name), ("email", email), ("password", password))
        if not value
    ]
    if missing:
        raise ValidationError(missing)
    if "@" not in email:
        raise ValidationError(["email"], "Enter a valid email address.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            ["password"],
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
        )
    return name, email, password


def _create_account(name, email, password, is_admin):
    name, email, password = _validate_account(name, email, password)
    if Voter.query.filter_by(email=email).first() is not None:
        raise DuplicateEmail()

    account = Voter(
        name=name,
        email=email,
        password_hash=hash_password(password),
        is_admin=is_admin,
        has_voted=False,
    )
    db.session.add(account)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateEmail()
    return account


def register_voter(name, email, password):
    voter = _create_account(name, email, password, is_admin=False)
    current_app.logger.info("Voter %s registered", voter.id)
    return voter


def create_admin(name, email, password):
    admin = _create_account(name, email, password, is_admin=True)
    current_app.logger.info("Admin account %s created", admin.email)
    return admin


def authenticate(email, password):
    account = Voter.query.filter_by(email=normalize_email(email)).first()
    if account is None or not verify_password(account.password_hash, password):
        return None
    return account


def get_voter(voter_id):
    voter = Voter.query.filter_by(id=voter_id, is_admin=False).first()
    if voter is None:
        raise UnknownVoter()
    return voter


def list_voters():
    return (
        Voter.query.filter_by(is_admin=False)
        .order_by(Voter.registered_at, Voter.id)
        .all()
    )


def count_voters():
    return Voter.query.filter_by(is_admin=False).count()


def count_voted():
    return Voter.query.filter_by(is_admin=False, has_voted=True).count()


def mark_voted(voter_id):
    """Flip has_voted for one voter inside the caller's transaction.

    The flag is checked and set by a single conditional UPDATE, so two
    concurrent submissions for the same voter cannot both succeed.
    """
    updated = Voter.query.filter_by(
        id=voter_id, is_admin=False, has_voted=False
    ).update({"has_voted": True}, synchronize_session=False)
    if updated == 1:
        return

    if Voter.query.filter_by(id=voter_id, is_admin=False).first() is None:
        raise UnknownVoter()
    raise AlreadyVoted()
