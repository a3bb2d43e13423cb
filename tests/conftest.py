from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from voteease import create_app
from voteease.extensions import db
from voteease.models import Candidate, Voter
from voteease.services.election import start_election
from voteease.services.security import hash_password


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {
                "connect_args": {"check_same_thread": False}
            },
            "ELECTION_TITLE": "Test Election",
            "ELECTION_DESCRIPTION": "Election used by the test suite",
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def make_voter(db_session):
    def _make_voter(name, email=None, has_voted=False, is_admin=False):
        voter = Voter(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            password_hash=hash_password("correct-horse"),
            has_voted=has_voted,
            is_admin=is_admin,
        )
        db_session.add(voter)
        db_session.commit()
        return voter

    return _make_voter


@pytest.fixture()
def voter(make_voter):
    return make_voter("Alice Johnson", "alice@example.com")


@pytest.fixture()
def admin_user(make_voter):
    return make_voter("Admin One", "admin1@example.com", is_admin=True)


@pytest.fixture()
def candidates(db_session):
    rows = [
        Candidate(
            name="John Smith",
            party="Democratic Party",
            symbol="D",
            description="Development and good governance",
            color="#3B82F6",
        ),
        Candidate(
            name="Sarah Johnson",
            party="Republican Party",
            symbol="R",
            description="Unity in diversity",
            color="#EF4444",
        ),
        Candidate(
            name="Michael Brown",
            party="Green Party",
            symbol="G",
            description="Social justice and equality",
            color="#10B981",
        ),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture()
def active_election(app):
    return start_election()


def _login(client, account):
    with client.session_transaction() as session:
        session["_user_id"] = str(account.id)
        session["_fresh"] = True
    return client


@pytest.fixture()
def auth_client(client, voter):
    return _login(client, voter)


@pytest.fixture()
def admin_client(client, admin_user):
    return _login(client, admin_user)
