"""Contact request endpoints for the calling dancer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from partnerfinder.api.deps import get_contact_workflow, get_viewer_id
from partnerfinder.domain.contacts.exceptions import (
	ContactConflict,
	ContactError,
	ContactRequestForbidden,
	ContactRequestNotFound,
	ContactRequestNotPending,
)
from partnerfinder.domain.contacts.models import ContactParty
from partnerfinder.domain.contacts.schemas import (
	ActiveContactRequest,
	ContactRequestSend,
	ContactRequestSummary,
)
from partnerfinder.domain.contacts.service import ContactRequestWorkflow

router = APIRouter()


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, ContactConflict) or isinstance(exc, ContactRequestNotPending):
		return HTTPException(status.HTTP_409_CONFLICT, detail=getattr(exc, "reason", "conflict"))
	if isinstance(exc, ContactRequestForbidden):
		return HTTPException(status.HTTP_403_FORBIDDEN, detail=getattr(exc, "reason", "forbidden"))
	if isinstance(exc, ContactRequestNotFound):
		return HTTPException(status.HTTP_404_NOT_FOUND, detail=getattr(exc, "reason", "not_found"))
	return HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/contacts", response_model=ContactRequestSummary, status_code=status.HTTP_201_CREATED)
async def send_contact_request(
	payload: ContactRequestSend,
	viewer_id: str = Depends(get_viewer_id),
	workflow: ContactRequestWorkflow = Depends(get_contact_workflow),
) -> ContactRequestSummary:
	sender = ContactParty(id=viewer_id, display_name=payload.sender_name, photo_url=payload.sender_photo_url)
	receiver = ContactParty(
		id=payload.receiver_id,
		display_name=payload.receiver_name,
		photo_url=payload.receiver_photo_url,
	)
	try:
		request = await workflow.send(sender, receiver)
	except ContactError as exc:
		raise _map_error(exc) from None
	return ContactRequestSummary.from_domain(request)


@router.post("/contacts/{request_id}/cancel", response_model=ContactRequestSummary)
async def cancel_contact_request(
	request_id: str,
	viewer_id: str = Depends(get_viewer_id),
	workflow: ContactRequestWorkflow = Depends(get_contact_workflow),
) -> ContactRequestSummary:
	try:
		request = await workflow.cancel(request_id, sender_id=viewer_id)
	except ContactError as exc:
		raise _map_error(exc) from None
	return ContactRequestSummary.from_domain(request)


@router.get("/contacts/active", response_model=ActiveContactRequest)
async def get_active_contact_request(
	viewer_id: str = Depends(get_viewer_id),
	workflow: ContactRequestWorkflow = Depends(get_contact_workflow),
) -> ActiveContactRequest:
	request = await workflow.find_active_request(viewer_id)
	return ActiveContactRequest(request=ContactRequestSummary.from_domain(request) if request else None)
