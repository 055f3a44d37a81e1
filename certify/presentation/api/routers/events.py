from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ....application.services.certificate_service import CertificateRegistry
from ....application.services.event_service import EventCatalog
from ....core.dependencies import get_certificate_registry, get_event_catalog
from ....domain.errors import NoEligibleRecipient, NotFound
from ....domain.models import Account, Certificate, Event
from ...api.dependencies import require_admin
from ...api.schemas.certificates import CertificateResponse, IssueCertificateRequest
from ...api.schemas.events import EventCreateRequest, EventResponse, EventUpdateRequest

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=List[EventResponse])
def list_events(
    _: Account = Depends(require_admin),
    catalog: EventCatalog = Depends(get_event_catalog),
) -> List[Event]:
    return catalog.list()


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreateRequest,
    admin: Account = Depends(require_admin),
    catalog: EventCatalog = Depends(get_event_catalog),
) -> Event:
    try:
        return catalog.create(payload.title, payload.description, payload.event_date, admin.id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.patch("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    payload: EventUpdateRequest,
    _: Account = Depends(require_admin),
    catalog: EventCatalog = Depends(get_event_catalog),
) -> Event:
    try:
        return catalog.update(
            event_id,
            title=payload.title,
            description=payload.description,
            event_date=payload.event_date,
        )
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: str,
    _: Account = Depends(require_admin),
    catalog: EventCatalog = Depends(get_event_catalog),
) -> Response:
    catalog.delete(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{event_id}/certificates",
    response_model=CertificateResponse,
    status_code=status.HTTP_201_CREATED,
)
def issue_certificate(
    event_id: str,
    payload: IssueCertificateRequest,
    _: Account = Depends(require_admin),
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> Certificate:
    try:
        return registry.issue(event_id, payload.recipient_account_id)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NoEligibleRecipient as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
