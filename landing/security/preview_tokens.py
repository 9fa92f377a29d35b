# landing/security/preview_tokens.py
# ⟶ Emisión y validación de preview tokens (fila en preview_tokens; el id es el secreto)
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from landing.core.logging import redact_token
from landing.core.settings import settings
from landing.models.preview import PreviewToken

logger = logging.getLogger(__name__)


@dataclass
class TokenValidation:
    valid: bool
    reason: Optional[str] = None
    token: Optional[PreviewToken] = None


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc(dt: datetime) -> datetime:
    # SQLite devuelve datetimes naive; se asumen UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def create_preview_token(
    db: Session,
    *,
    org_id: str,
    page_id: str | None = None,
    section_id: str | None = None,
    user_id: str | None = None,
    expires_in: int | None = None,
) -> PreviewToken:
    """
    Emite un token de preview. En producción lo hace el editor externo;
    aquí lo usan el seed y los tests.
    """
    now = _now_utc()
    exp_s = expires_in if expires_in is not None else settings.PREVIEW_TOKEN_EXPIRE_SECONDS
    token = PreviewToken(
        id=secrets.token_urlsafe(32),
        org_id=org_id,
        page_id=page_id,
        section_id=section_id,
        user_id=user_id,
        created_at=now,
        expires_at=now + timedelta(seconds=exp_s),
    )
    db.add(token)
    db.flush()
    return token


def validate_preview_token(
    db: Session,
    token: str,
    *,
    org_id: str | None = None,
    page_id: str | None = None,
    section_id: str | None = None,
    now: datetime | None = None,
) -> TokenValidation:
    """
    Valida un token contra el scope que pida el caller.

    - Inexistente → inválido.
    - expires_at <= now → inválido (expirado).
    - Cada scope recibido (no vacío) debe coincidir exacto con el del token;
      los que no se reciben no se revisan.

    No consume el token: sigue siendo válido hasta su expiración natural.
    Usa la sesión propia del servicio (sin RLS): este validador es el límite de confianza.
    """
    if not token:
        return TokenValidation(valid=False, reason="Token not found")

    try:
        row = db.get(PreviewToken, token)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Preview token lookup failed for %s", redact_token(token))
        return TokenValidation(valid=False, reason="Token lookup failed")

    if row is None:
        logger.info("Preview token %s not found", redact_token(token))
        return TokenValidation(valid=False, reason="Token not found")

    current = _to_utc(now) if now else _now_utc()
    if _to_utc(row.expires_at) <= current:
        logger.info("Preview token %s expired", redact_token(token))
        return TokenValidation(valid=False, reason="Token expired", token=row)

    if org_id and row.org_id != org_id:
        return TokenValidation(valid=False, reason="Token does not match organization", token=row)

    if page_id and row.page_id != page_id:
        return TokenValidation(valid=False, reason="Token does not match page", token=row)

    if section_id and row.section_id != section_id:
        return TokenValidation(valid=False, reason="Token does not match section", token=row)

    return TokenValidation(valid=True, token=row)
