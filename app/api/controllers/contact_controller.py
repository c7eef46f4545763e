from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.api.deps import get_contact_service, get_settings
from app.core.config import Settings
from app.core.constants import MSG_API_KEY_MISSING, MSG_FIELDS_REQUIRED, MSG_INTERNAL_ERROR
from app.schemas.contact import ContactMessageIn, ContactOkOut, ErrorOut, ValidationErrorOut
from app.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post(
    "",
    response_model=ContactOkOut,
    responses={
        400: {"model": ErrorOut},
        405: {"model": ErrorOut},
        422: {"model": ValidationErrorOut},
        500: {"model": ErrorOut},
    },
)
async def send_contact(
    data: Optional[ContactMessageIn] = Body(default=None),
    settings: Settings = Depends(get_settings),
    svc: ContactService = Depends(get_contact_service),
):
    if data is None or not data.is_complete():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MSG_FIELDS_REQUIRED,
        )

    if not settings.gemini_api_key:
        logger.error("GEMINI_API_KEY environment variable is not set.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MSG_API_KEY_MISSING,
        )

    try:
        category = await svc.classify_message(data.message)
    except Exception as exc:
        logger.error(f"Contact handler caught an error: {exc}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{MSG_INTERNAL_ERROR}: {exc}",
        )
    return ContactOkOut(category=category)
