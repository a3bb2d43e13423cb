import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    APP_ENV = os.getenv("APP_ENV", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///voteease.db")
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    ELECTION_TITLE = os.getenv("ELECTION_TITLE", "General Election")
    ELECTION_DESCRIPTION = os.getenv(
        "ELECTION_DESCRIPTION",
        "Vote for your preferred candidate in the general election",
    )

    SQLALCHEMY_ENGINE_OPTIONS = (
        {"connect_args": {"ssl": {"ca": os.getenv("MYSQL_SSL_CA")}}}
        if os.getenv("MYSQL_SSL_CA")
        else {}
    )
