import uuid
from bloom.core.clock import utcnow
from sqlalchemy import Boolean, Column, DateTime, String, Uuid
from bloom.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    # Soft-delete marker set once the user's data has been erased
    account_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime, nullable=True)
    email_backup = Column(String, nullable=True)
