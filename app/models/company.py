"""Client, supplier and authorized signer model module."""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import AuditMixin, Base, CreatedByMixin, enum_column
from app.models.enums import CompanyType


class CompanyMixin(AuditMixin, CreatedByMixin):
    """Columns shared by clients and suppliers."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text)
    reu_code: Mapped[str | None] = mapped_column(String(64))
    contacts: Mapped[str | None] = mapped_column(Text)
    document_url: Mapped[str | None] = mapped_column(String(1024))
    document_key: Mapped[str | None] = mapped_column(String(512))
    document_name: Mapped[str | None] = mapped_column(String(255))


class Client(Base, CompanyMixin):
    __tablename__ = "clients"
    __table_args__ = (Index("idx_clients_name", "name"),)


class Supplier(Base, CompanyMixin):
    __tablename__ = "suppliers"
    __table_args__ = (Index("idx_suppliers_name", "name"),)


class AuthorizedSigner(Base, AuditMixin, CreatedByMixin):
    __tablename__ = "authorized_signers"
    __table_args__ = (Index("idx_signers_company", "company_type", "company_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(Integer, nullable=False)
    company_type: Mapped[CompanyType] = mapped_column(enum_column(CompanyType), nullable=False)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    position: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(64))
    email: Mapped[str | None] = mapped_column(String(320))
    document_url: Mapped[str | None] = mapped_column(String(1024))
    document_key: Mapped[str | None] = mapped_column(String(512))
    document_name: Mapped[str | None] = mapped_column(String(255))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
