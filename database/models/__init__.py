from .base import Base, JSONList
from .job import Job
from .talent import Talent

__all__ = [
    'Base',
    'JSONList',
    'Job',
    'Talent',
]
