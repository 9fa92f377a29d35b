# landing/web/ui/section_renderer.py
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from landing.schemas.sections import (
    BrandPromiseContent,
    BrandStoryContent,
    ContentModel,
    Cta,
    CustomerReviewsContent,
    FeaturedProductsContent,
    FinalCtaContent,
    HeroContent,
    HowToUseContent,
    IngredientTransparencyContent,
    SustainabilityContent,
)

logger = logging.getLogger(__name__)

# ===================== Modelos de render =====================

@dataclass
class Block:
    kind: str               # "badge" | "text" | "ctas" | "media" | "cards" | "list" | "placeholder"
    title: Optional[str]
    payload: Any

@dataclass
class SectionRender:
    anchor: str                     # id del anchor para TOC / data-section-key
    component: str
    title: str
    blocks: List[Block]
    section_id: Optional[str] = None
    section_key: Optional[str] = None
    placeholder: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass
class PageRender:
    configured: bool
    is_draft_mode: bool
    toc: List[Dict[str, str]] = field(default_factory=list)
    sections: List[SectionRender] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# ===================== Utils =====================

def _ctas(*ctas: Cta) -> List[Dict[str, str]]:
    return [{"label": c.label, "href": c.href} for c in ctas]

def _add_block(blocks: List[Block], *, kind: str, title: Optional[str], payload: Any) -> None:
    blocks.append(Block(kind=kind, title=title, payload=payload))

# ===================== Renderers por componente =====================

def _render_hero(c: HeroContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="badge", title="Badge", payload=c.badge.model_dump())
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="text", title="Subtitle", payload=c.subtitle)
    _add_block(blocks, kind="ctas", title="Actions", payload=_ctas(c.primary_cta, c.secondary_cta))
    _add_block(blocks, kind="media", title="Media", payload=[
        {"url": c.hero_image, "alt": c.title, "role": "hero"},
        {"url": c.accent_image, "alt": "", "role": "accent"},
    ])
    return blocks

def _render_brand_promise(c: BrandPromiseContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="cards", title="Promises", payload=[p.model_dump() for p in c.promises])
    return blocks

def _render_ingredients(c: IngredientTransparencyContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="text", title="Subtitle", payload=c.subtitle)
    _add_block(blocks, kind="cards", title="Ingredients", payload=[i.model_dump() for i in c.ingredients])
    _add_block(blocks, kind="ctas", title="Actions", payload=[{"label": c.cta_label, "href": "#ingredients"}])
    return blocks

def _render_featured_products(c: FeaturedProductsContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="text", title="Subtitle", payload=c.subtitle)
    cards = []
    for p in c.products:
        card = p.model_dump()
        card["benefits"] = card["benefits"][:3]
        card["action"] = "Coming Soon" if p.is_coming_soon else "Shop Now"
        card["disabled"] = p.is_coming_soon
        cards.append(card)
    _add_block(blocks, kind="cards", title="Products", payload=cards)
    return blocks

def _render_brand_story(c: BrandStoryContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="list", title="Story", payload=list(c.paragraphs))
    _add_block(blocks, kind="media", title="Media", payload=[{"url": c.image, "alt": c.image_alt}])
    _add_block(blocks, kind="ctas", title="Actions", payload=[{"label": c.cta_label, "href": "#story"}])
    return blocks

def _render_reviews(c: CustomerReviewsContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="cards", title="Reviews", payload=[r.model_dump() for r in c.reviews])
    return blocks

def _render_how_to_use(c: HowToUseContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="text", title="Subtitle", payload=c.subtitle)
    _add_block(blocks, kind="list", title="Steps", payload=[s.model_dump() for s in c.steps])
    _add_block(blocks, kind="ctas", title="Actions", payload=[{"label": c.cta_label, "href": "#routine"}])
    return blocks

def _render_sustainability(c: SustainabilityContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="text", title="Subtitle", payload=c.subtitle)
    _add_block(blocks, kind="cards", title="Features", payload=[f.model_dump() for f in c.features])
    return blocks

def _render_final_cta(c: FinalCtaContent) -> List[Block]:
    blocks: List[Block] = []
    _add_block(blocks, kind="text", title="Title", payload=c.title)
    _add_block(blocks, kind="text", title="Subtitle", payload=c.subtitle)
    _add_block(blocks, kind="ctas", title="Actions", payload=_ctas(c.cta))
    _add_block(blocks, kind="text", title="Tagline", payload=c.tagline)
    _add_block(blocks, kind="media", title="Media", payload=[{"url": c.image, "alt": "Eucalyptus"}])
    return blocks

Renderer = Callable[[Any], List[Block]]

# Registro cerrado: component → (modelo de contenido, renderer)
SECTION_COMPONENTS: Dict[str, Tuple[Type[ContentModel], Renderer]] = {
    "HeroSection": (HeroContent, _render_hero),
    "BrandPromise": (BrandPromiseContent, _render_brand_promise),
    "IngredientTransparency": (IngredientTransparencyContent, _render_ingredients),
    "FeaturedProducts": (FeaturedProductsContent, _render_featured_products),
    "BrandStory": (BrandStoryContent, _render_brand_story),
    "CustomerReviews": (CustomerReviewsContent, _render_reviews),
    "HowToUse": (HowToUseContent, _render_how_to_use),
    "Sustainability": (SustainabilityContent, _render_sustainability),
    "FinalCTA": (FinalCtaContent, _render_final_cta),
}

# ===================== Dispatch =====================

def parse_content(model: Type[ContentModel], content: Any) -> ContentModel:
    """
    Parsea el contenido contra el modelo del componente (los envoltorios legacy
    de los campos escalares los colapsa el propio modelo).
    Un blob que no es dict o que no parsea cae a los defaults (se loguea).
    """
    if not isinstance(content, dict):
        if content not in (None, ""):
            logger.warning("%s received non-object content (%s); using defaults", model.__name__, type(content).__name__)
        return model()
    try:
        return model.model_validate(content)
    except ValidationError as exc:
        logger.warning("%s content did not parse (%d errors); using defaults", model.__name__, exc.error_count())
        return model()

def _placeholder(component: str) -> List[Block]:
    return [Block(kind="placeholder", title=None, payload=f"Component {component} not found")]

def dispatch(
    component: str,
    content: Any,
    *,
    section_id: Optional[str] = None,
    section_key: Optional[str] = None,
) -> SectionRender:
    """
    component → renderer. Nombres desconocidos devuelven un placeholder visible;
    nunca lanza (el contenido lo escribe un editor externo).
    """
    anchor = section_key or f"section-{(component or 'unknown').lower()}"
    entry = SECTION_COMPONENTS.get(component)
    if entry is None:
        logger.warning("Unknown section component %r (section %s)", component, section_key or section_id)
        return SectionRender(
            anchor=anchor, component=str(component), title=str(component),
            blocks=_placeholder(component), section_id=section_id,
            section_key=section_key, placeholder=True,
        )

    model, renderer = entry
    parsed = parse_content(model, content)
    return SectionRender(
        anchor=anchor, component=component, title=component,
        blocks=renderer(parsed), section_id=section_id, section_key=section_key,
    )

# ===================== Página =====================

def render_not_configured() -> PageRender:
    section = SectionRender(
        anchor="not-configured", component="NotConfigured", title="Page not found",
        blocks=[Block(kind="placeholder", title=None,
                      payload="Page not found. Please configure your pages in the dashboard.")],
        placeholder=True,
    )
    return PageRender(configured=False, is_draft_mode=False, sections=[section])

def render_page(page: Any, sections: List[Any], *, is_draft_mode: bool) -> PageRender:
    """
    Punto único para el router: secciones ya resueltas (con `content` elegido) → render model.
    """
    rendered: List[SectionRender] = []
    toc: List[Dict[str, str]] = []
    for idx, sec in enumerate(sections, 1):
        r = dispatch(sec.component, sec.content, section_id=sec.id, section_key=sec.key)
        rendered.append(r)
        toc.append({"anchor": r.anchor, "label": f"{idx}. {sec.label or r.title}"})

    meta = {
        "page_id": getattr(page, "id", None),
        "page_slug": getattr(page, "slug", None),
        "page_name": getattr(page, "name", None),
        "template": getattr(page, "template", None),
    }
    return PageRender(configured=True, is_draft_mode=is_draft_mode, toc=toc, sections=rendered, meta=meta)
