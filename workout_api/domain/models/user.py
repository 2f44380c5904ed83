"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from workout_api.core.security import hash_password, verify_password
from workout_api.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def set_password(self, plaintext: str) -> None:
        """Store a bcrypt hash of ``plaintext``; the plaintext itself is not kept."""
        self.password_hash = hash_password(plaintext)

    def password_matches(self, candidate: str) -> bool:
        return verify_password(candidate, self.password_hash)

    def __repr__(self):
        return f"<User {self.username}>"
