from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from ....application.services.certificate_service import CertificateRegistry
from ....core.dependencies import get_certificate_registry
from ....domain.errors import NotFound
from ....domain.models import Account, Certificate
from ...api.dependencies import require_admin, require_user
from ...api.schemas.certificates import (
    CertificateResponse,
    CertificateSummaryResponse,
    DeliveryStatusUpdateRequest,
)

router = APIRouter(prefix="/api", tags=["Certificates"])


@router.get("/certificates", response_model=List[CertificateResponse])
def list_certificates(
    _: Account = Depends(require_admin),
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> List[Certificate]:
    return registry.list()


@router.get("/certificates/summary", response_model=CertificateSummaryResponse)
def certificate_summary(
    _: Account = Depends(require_admin),
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> Dict[str, int]:
    return registry.summary()


@router.patch("/certificates/{certificate_id}/delivery-status", response_model=CertificateResponse)
def update_delivery_status(
    certificate_id: str,
    payload: DeliveryStatusUpdateRequest,
    _: Account = Depends(require_admin),
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> Certificate:
    try:
        return registry.update_delivery_status(certificate_id, payload.status)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("/me/certificates", response_model=List[CertificateResponse])
def my_certificates(
    current: Account = Depends(require_user),
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> List[Certificate]:
    return registry.list_for_account(current.id)
