from datetime import datetime

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String, UniqueConstraint

from customer_service.core.database import Base


class Manager(Base):
    __tablename__ = "managers"
    __table_args__ = (UniqueConstraint("login", name="uq_managers_login"),)

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)
    name = Column(String(120), nullable=False)
    login = Column(String(120), nullable=False)
    password_hash = Column(String, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created = Column(DateTime, nullable=False, default=datetime.utcnow)
