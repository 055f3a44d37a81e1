from fastapi import APIRouter, Depends

from ....application.services.certificate_service import CertificateRegistry
from ....core.dependencies import get_certificate_registry
from ...api.schemas.certificates import CertificateResponse, VerificationResponse

router = APIRouter(prefix="/api/verify", tags=["Verification"])


@router.get("/{certificate_number}", response_model=VerificationResponse)
def verify_certificate(
    certificate_number: str,
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> VerificationResponse:
    """Public authenticity check; no session is required."""
    certificate = registry.verify_by_number(certificate_number)
    if certificate is None:
        return VerificationResponse(valid=False)
    return VerificationResponse(valid=True, certificate=CertificateResponse.model_validate(certificate))
