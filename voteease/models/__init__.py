from voteease.models.candidate import Candidate
from voteease.models.election import Election, ElectionStatus
from voteease.models.voter import Voter

__all__ = [
    "Candidate",
    "Election",
    "ElectionStatus",
    "Voter",
]
