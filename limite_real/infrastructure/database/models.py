"""SQLAlchemy ORM models for the stored financial profile"""

import uuid
from sqlalchemy import Column, String, Numeric, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class ProfileRow(Base):
    """Single financial profile record (one implicit user)"""

    __tablename__ = "financial_profile"

    key = Column(Text, primary_key=True)
    total_limit = Column(Numeric(14, 2), nullable=False)
    month_spend = Column(Numeric(14, 2), nullable=False, default=0)
    active_installments = Column(Numeric(14, 2), nullable=False, default=0)
    closing_day = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    expenses = relationship(
        "ExpenseRow",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ExpenseRow.position",
    )


class ExpenseRow(Base):
    """Expense logged against the profile during the current period"""

    __tablename__ = "expense_record"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    profile_key = Column(Text, ForeignKey("financial_profile.key", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    recorded_at = Column(DateTime(timezone=True), nullable=False)

    profile = relationship("ProfileRow", back_populates="expenses")
