# landing/services/section_service.py
# Resolución de secciones de una página: precedencia draft/published, visibilidad y fallbacks
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from landing.models.content import PageSection
from landing.security.preview_tokens import validate_preview_token

logger = logging.getLogger(__name__)

PUBLIC_STATUSES = ("published", "dirty")

HERO_COMPONENT = "HeroSection"
_BADGE_ONLY_KEYS = {"icon", "text"}


@dataclass
class ResolvedSection:
    id: str
    key: str
    label: str
    component: str
    position: int
    status: str
    published_content: Dict[str, Any]
    draft_content: Dict[str, Any]
    content: Dict[str, Any]


@dataclass
class SectionResolution:
    sections: List[ResolvedSection] = field(default_factory=list)
    is_draft_mode: bool = False


# -----------------------------
# Test de "tiene contenido"
# -----------------------------
def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, dict):
        return len(value) > 0
    if isinstance(value, list):
        return len(value) > 0
    return True


def has_content(content: Any) -> bool:
    """
    Un dict tiene contenido si al menos una clave tiene un valor que no es
    None, ni string en blanco, ni dict vacío. Las listas no vacías cuentan
    sin importar la forma de sus elementos.
    """
    if not isinstance(content, dict):
        return False
    return any(_has_value(v) for v in content.values())


def _as_dict(content: Any) -> Dict[str, Any]:
    return content if isinstance(content, dict) else {}


def select_content(section: PageSection, *, is_draft_mode: bool) -> Dict[str, Any]:
    """
    Preview: draft → published → {}.
    Público: published → draft → {}.
    """
    published = _as_dict(section.published_content)
    draft = _as_dict(section.draft_content)
    preferred, fallback = (draft, published) if is_draft_mode else (published, draft)

    if has_content(preferred):
        chosen = preferred
    elif has_content(fallback):
        chosen = fallback
    else:
        chosen = {}

    return _repair_hero_badge_capture(section, chosen, published)


def _repair_hero_badge_capture(
    section: PageSection, chosen: Dict[str, Any], published: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Legacy: algunos saves del editor guardaron solo el subárbol `badge`
    ({icon, text}) como contenido completo del hero. Si published tiene más
    claves, se usa published.
    """
    if section.component != HERO_COMPONENT:
        return chosen
    if set(chosen.keys()) != _BADGE_ONLY_KEYS:
        return chosen
    if len(published) > len(chosen):
        logger.warning(
            "Section %s (%s) looks like a captured badge only; using published_content",
            section.id, section.key,
        )
        return published
    return chosen


def is_publicly_visible(section: PageSection) -> bool:
    # status=draft nunca se publicó: no debe filtrarse aunque traiga published_content
    if section.status not in PUBLIC_STATUSES:
        return False
    return has_content(section.published_content) or has_content(section.draft_content)


# -----------------------------
# Fetch + resolución
# -----------------------------
def fetch_page_sections(db: Session, page_id: str) -> List[PageSection]:
    stmt = (
        select(PageSection)
        .where(PageSection.page_id == page_id)
        .order_by(
            PageSection.position.asc(),
            PageSection.created_at.asc(),
            PageSection.id.asc(),
        )
    )
    return list(db.scalars(stmt).all())


def _to_resolved(section: PageSection, *, is_draft_mode: bool) -> ResolvedSection:
    return ResolvedSection(
        id=section.id,
        key=section.key,
        label=section.label or "",
        component=section.component,
        position=section.position,
        status=section.status,
        published_content=_as_dict(section.published_content),
        draft_content=_as_dict(section.draft_content),
        content=select_content(section, is_draft_mode=is_draft_mode),
    )


def resolve_sections(
    db: Session,
    page_id: str,
    preview_token: Optional[str] = None,
    *,
    org_id: Optional[str] = None,
) -> SectionResolution:
    """
    Secciones ordenadas de una página con la política draft/published aplicada.

    - Con token válido para la página (y org, si se pasa) → modo draft:
      todas las secciones, prefiriendo draft_content.
    - Sin token / token inválido → vista pública: solo published|dirty con
      algún contenido, prefiriendo published_content.
    - Error de store → lista vacía, conservando is_draft_mode.
    """
    is_draft_mode = False
    if preview_token:
        validation = validate_preview_token(db, preview_token, org_id=org_id, page_id=page_id)
        is_draft_mode = validation.valid
        if not validation.valid:
            logger.info("Preview rejected for page %s: %s", page_id, validation.reason)

    try:
        rows = fetch_page_sections(db, page_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Section fetch failed for page %s", page_id)
        return SectionResolution(sections=[], is_draft_mode=is_draft_mode)

    if not is_draft_mode:
        rows = [s for s in rows if is_publicly_visible(s)]

    return SectionResolution(
        sections=[_to_resolved(s, is_draft_mode=is_draft_mode) for s in rows],
        is_draft_mode=is_draft_mode,
    )
