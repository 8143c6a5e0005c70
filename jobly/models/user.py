"""
User accounts and their job applications.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, false
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class User(Base):
    """
    User account. The username is the primary key and the token subject.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # bcrypt hash, never the plain password
    password = Column(Text, nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, server_default=false(), nullable=False)

    # Relationships
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"


class Application(Base):
    """A user's application to a job; one per (user, job)."""
    __tablename__ = "applications"

    username = Column(String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)

    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")
