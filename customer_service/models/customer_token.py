from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from customer_service.core.config import TOKEN_BYTES_MAX
from customer_service.core.database import Base


class CustomerToken(Base):
    __tablename__ = "customers_tokens"

    token = Column(String(TOKEN_BYTES_MAX * 2), primary_key=True)
    customer_id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expire = Column(DateTime, nullable=False)
    created = Column(DateTime, nullable=False, default=datetime.utcnow)

    customer = relationship("Customer", back_populates="tokens")
