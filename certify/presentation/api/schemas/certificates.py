"""Pydantic schemas for certificate issuance, delivery tracking and verification."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class IssueCertificateRequest(BaseModel):
    """Request schema for issuing a certificate for an event."""

    recipient_account_id: Optional[str] = None


class DeliveryStatusUpdateRequest(BaseModel):
    status: Literal["pending", "sent", "delivered"]


class CertificateResponse(BaseModel):
    """Response schema for certificate data."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    user_id: str
    certificate_number: str
    issued_at: datetime
    verified: bool
    delivery_status: str
    event_title: Optional[str] = None


class CertificateSummaryResponse(BaseModel):
    """Dashboard counters."""

    total: int
    verified: int
    pending: int
    sent: int
    delivered: int


class VerificationResponse(BaseModel):
    """Response schema for public verification."""

    valid: bool
    certificate: Optional[CertificateResponse] = None
