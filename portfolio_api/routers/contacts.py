# portfolio_api/routers/contacts.py
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from portfolio_api.database.contact_store import PersistenceError
from portfolio_api.schemas.contacts import (
    ContactCreate,
    ContactCreateResponse,
    ContactListResponse,
    ErrorResponse,
    contact_schema_document,
)
from portfolio_api.security import require_admin_token
from portfolio_api.utils.contact_service import ContactSubmissionService
from portfolio_api.utils.email_service import DeliveryError

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = "Email sent successfully! I'll get back to you soon."
RECEIVED_MESSAGE = "Thanks for reaching out! Your message was received and I'll get back to you soon."


def get_contact_service(request: Request) -> ContactSubmissionService:
    return request.app.state.contact_service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


# Anyone can post contact message
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ContactCreateResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_contact(
    data: ContactCreate,
    service: ContactSubmissionService = Depends(get_contact_service),
):
    try:
        result = await service.submit(data)
    except DeliveryError as e:
        logger.error(f"Contact from {data.email} rejected, email not delivered")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except PersistenceError as e:
        logger.error(f"Contact from {data.email} rejected, not stored")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    logger.info(f"Contact {result.record.id} accepted from {data.email}")
    return ContactCreateResponse(
        message=SUCCESS_MESSAGE if result.delivered else RECEIVED_MESSAGE,
        data=result.record,
        warning=result.warning,
    )


# Admin listing, gated only when ADMIN_API_TOKEN is set
@router.get(
    "",
    response_model=ContactListResponse,
    responses={401: {"description": "Missing or wrong admin token"}, 500: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin_token)],
)
async def list_contacts(service: ContactSubmissionService = Depends(get_contact_service)):
    try:
        contacts = await service.list_all()
    except PersistenceError:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch contacts")
    return ContactListResponse(data=contacts)


@router.get("/schema")
def get_contact_schema():
    return {"success": True, "data": contact_schema_document()}
