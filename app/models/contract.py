"""Contract model module."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import AuditMixin, Base, CreatedByMixin, enum_column
from app.models.enums import ContractStatus, ContractType


class Contract(Base, AuditMixin, CreatedByMixin):
    __tablename__ = "contracts"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_contracts_amount_non_negative"),
        Index("idx_contracts_status", "status"),
        Index("idx_contracts_end_date", "end_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contract_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    client_id: Mapped[int | None] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"))
    supplier_id: Mapped[int | None] = mapped_column(ForeignKey("suppliers.id", ondelete="RESTRICT"))
    client_signer_id: Mapped[int | None] = mapped_column(ForeignKey("authorized_signers.id", ondelete="SET NULL"))
    supplier_signer_id: Mapped[int | None] = mapped_column(ForeignKey("authorized_signers.id", ondelete="SET NULL"))
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    type: Mapped[ContractType] = mapped_column(enum_column(ContractType), default=ContractType.SERVICE, nullable=False)
    status: Mapped[ContractStatus] = mapped_column(enum_column(ContractStatus), default=ContractStatus.PENDING, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    client = relationship("Client")
    supplier = relationship("Supplier")
    client_signer = relationship("AuthorizedSigner", foreign_keys=[client_signer_id])
    supplier_signer = relationship("AuthorizedSigner", foreign_keys=[supplier_signer_id])
    supplements = relationship("Supplement", back_populates="contract", passive_deletes="all")
    documents = relationship("Document", back_populates="contract", cascade="all, delete-orphan")

    @property
    def client_name(self) -> str | None:
        return self.client.name if self.client is not None else None

    @property
    def supplier_name(self) -> str | None:
        return self.supplier.name if self.supplier is not None else None
