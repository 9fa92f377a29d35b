from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from landing.core.logging import redact_token
from landing.models.content import Page
from landing.schemas.delivery import DeliveryPageOut, DeliverySectionOut, PageMetaOut
from landing.schemas.sections import unwrap_section_content
from landing.services.page_service import resolve_page
from landing.services.section_service import ResolvedSection, resolve_sections

logger = logging.getLogger(__name__)


@dataclass
class PageContent:
    page: Page
    is_draft_mode: bool
    sections: List[ResolvedSection] = field(default_factory=list)


def resolve_page_content(
    db: Session,
    business_slug: str,
    page_slug: str,
    preview_token: Optional[str] = None,
) -> Optional[PageContent]:
    """
    Pipeline completo de lectura:
      (business_slug, page_slug) → Page → token (si hay) → secciones → contenido normalizado.
    None si el business o la página no existen (o el store falló).
    El slug de business llega explícito: el default de tenant se decide en el router.
    """
    page = resolve_page(db, business_slug, page_slug)
    if page is None:
        logger.info("Page not configured: business=%s page=%s", business_slug, page_slug)
        return None

    resolution = resolve_sections(db, page.id, preview_token, org_id=page.org_id)
    if preview_token:
        logger.info(
            "Page %s/%s resolved with token %s (draft=%s)",
            business_slug, page_slug, redact_token(preview_token), resolution.is_draft_mode,
        )

    for section in resolution.sections:
        section.content = unwrap_section_content(section.component, section.content)

    return PageContent(page=page, is_draft_mode=resolution.is_draft_mode, sections=resolution.sections)


def to_delivery_out(result: PageContent) -> DeliveryPageOut:
    page = result.page
    return DeliveryPageOut(
        page=PageMetaOut(
            id=page.id,
            org_id=page.org_id,
            slug=page.slug,
            name=page.name,
            template=page.template,
            status=page.status,
            updated_at=page.updated_at,
        ),
        is_draft_mode=result.is_draft_mode,
        sections=[
            DeliverySectionOut(
                section_id=s.id,
                section_key=s.key,
                component=s.component,
                label=s.label,
                position=s.position,
                content=s.content if isinstance(s.content, dict) else {},
            )
            for s in result.sections
        ],
    )
