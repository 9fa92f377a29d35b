# landing/api/delivery/preview.py
from __future__ import annotations
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from landing.db.session import get_db
from landing.schemas.delivery import TokenValidationOut
from landing.security.preview_tokens import validate_preview_token
from landing.services.cache_service import apply_no_store

router = APIRouter(prefix="/delivery/v1", tags=["delivery"])


@router.get("/preview/validate", response_model=TokenValidationOut)
def validate_token(
    response: Response,
    token: str = Query(..., min_length=1),
    org_id: str | None = Query(None),
    page_id: str | None = Query(None),
    section_id: str | None = Query(None),
    db: Session = Depends(get_db),
):
    result = validate_preview_token(db, token, org_id=org_id, page_id=page_id, section_id=section_id)
    apply_no_store(response)
    return TokenValidationOut(valid=result.valid, reason=result.reason)
