"""
Contact form endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.schemas import Identity

from . import schemas, service

router = APIRouter(prefix="/v1/contact")


@router.post("")
async def send_contact_email(
    request: schemas.ContactRequest,
    _: Identity = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.send_contact_message(request)
