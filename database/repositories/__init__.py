from database.repositories.base import BaseRepository
from database.repositories.talent import TalentRepository
from database.repositories.job import JobRepository

__all__ = [
    'BaseRepository',
    'TalentRepository',
    'JobRepository',
]
