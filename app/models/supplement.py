"""Supplement (contract amendment) model module."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import AuditMixin, Base, CreatedByMixin, enum_column
from app.models.enums import SupplementStatus


class Supplement(Base, AuditMixin, CreatedByMixin):
    __tablename__ = "supplements"
    __table_args__ = (
        UniqueConstraint("contract_id", "supplement_number", name="uq_supplements_contract_number"),
        Index("idx_supplements_contract", "contract_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contract_id: Mapped[int] = mapped_column(ForeignKey("contracts.id", ondelete="RESTRICT"), nullable=False)
    supplement_number: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)
    modifications: Mapped[str | None] = mapped_column(Text)
    status: Mapped[SupplementStatus] = mapped_column(
        enum_column(SupplementStatus), default=SupplementStatus.DRAFT, nullable=False
    )
    client_signer_id: Mapped[int | None] = mapped_column(ForeignKey("authorized_signers.id", ondelete="SET NULL"))
    supplier_signer_id: Mapped[int | None] = mapped_column(ForeignKey("authorized_signers.id", ondelete="SET NULL"))

    contract = relationship("Contract", back_populates="supplements")
