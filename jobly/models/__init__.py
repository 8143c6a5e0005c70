"""
Database models package.

The tables are defined here; the data-access layer in jobly.crud queries
them with parameterized SQL.
"""

from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.user import Application, User

__all__ = ["Company", "Job", "User", "Application"]
