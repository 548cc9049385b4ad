from fastapi import APIRouter
from storefront.api.v1.schemas import ContactPayload, MessageResponse
from storefront.services.notifier import send_contact_message

router = APIRouter()

@router.post("/contact", response_model=MessageResponse)
def contact(payload: ContactPayload):
    send_contact_message(payload.name, str(payload.email) if payload.email else None, payload.subject, payload.message)
    return MessageResponse(message="Message sent successfully")
