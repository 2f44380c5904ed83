"""Token domain model — maps to the 'tokens' table.

Only the SHA-256 digest of a token is stored; the plaintext is handed to the
client once at issuance and cannot be recovered from this table.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, LargeBinary

from workout_api.infrastructure.database import Base


class Token(Base):
    __tablename__ = "tokens"

    hash = Column(LargeBinary(32), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expiry = Column(DateTime(timezone=True), nullable=False)
    scope = Column(String(50), nullable=False)

    def __repr__(self):
        return f"<Token user={self.user_id} scope={self.scope}>"
