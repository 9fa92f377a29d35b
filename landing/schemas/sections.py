# landing/schemas/sections.py
# Pydantic — un modelo de contenido por componente (parse, don't validate).
# Todo campo es opcional y trae su default de display; las formas raras del
# editor (escalares envueltos, registros aplanados a string) se coercionan aquí.
from __future__ import annotations

from typing import Annotated, Any, Callable, ClassVar, Dict, FrozenSet, List, Optional, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticUseDefault

from landing.utils.normalize_content import normalize_content

# Claves que el editor usa para envolver un escalar: {"value": "Leaf"}, {"text": "..."}
WRAPPER_KEYS = ("value", "text", "label", "title", "name")


# ===================== Coerciones =====================

def coerce_text(v: Any) -> str:
    """String no vacío o el default del campo."""
    if isinstance(v, bool):
        raise PydanticUseDefault()
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, str):
        if not v.strip():
            raise PydanticUseDefault()
        return v
    if isinstance(v, dict):
        for key in WRAPPER_KEYS:
            inner = v.get(key)
            if isinstance(inner, str) and inner.strip():
                return inner
    raise PydanticUseDefault()


def coerce_list(v: Any) -> list:
    if isinstance(v, list):
        items = [it for it in v if it is not None]
        if items:
            return items
    raise PydanticUseDefault()


def coerce_text_list(v: Any) -> List[str]:
    items = coerce_list(v)
    out: List[str] = []
    for it in items:
        try:
            out.append(coerce_text(it))
        except PydanticUseDefault:
            continue
    if not out:
        raise PydanticUseDefault()
    return out


def coerce_number(v: Any) -> float:
    if isinstance(v, bool) or v is None:
        raise PydanticUseDefault()
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        try:
            return float(v.strip())
        except ValueError:
            raise PydanticUseDefault()
    raise PydanticUseDefault()


def record_from(primary_key: str) -> Callable[[Any], Any]:
    """Registro que pudo llegar aplanado a su campo principal ("Buy" → {"label": "Buy"})."""
    def _coerce(v: Any) -> Any:
        if isinstance(v, (str, int, float)) and not isinstance(v, bool):
            return {primary_key: str(v)}
        if isinstance(v, dict) and v:
            return v
        raise PydanticUseDefault()
    return _coerce


Text = Annotated[str, BeforeValidator(coerce_text)]
TextList = Annotated[List[str], BeforeValidator(coerce_text_list)]

# Campos escalares: sólo estos aceptan el colapso de envoltorios legacy.
# Los registros (badge, CTAs) y las listas los coerciona su propio modelo.
SCALAR_COERCERS = (coerce_text, coerce_text_list, coerce_number)


class ContentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def scalar_keys(cls) -> FrozenSet[str]:
        """Nombres y alias de los campos escalares del modelo."""
        keys = set()
        for name, info in cls.model_fields.items():
            if any(isinstance(m, BeforeValidator) and m.func in SCALAR_COERCERS for m in info.metadata):
                keys.add(name)
                if info.alias:
                    keys.add(info.alias)
        return frozenset(keys)

    @classmethod
    def unwrap_legacy(cls, content: Dict[str, Any]) -> Dict[str, Any]:
        """Colapsa envoltorios de una sola clave en los campos escalares; el resto queda igual."""
        scalar = cls.scalar_keys()
        return {
            key: normalize_content(value, parent_key=key) if key in scalar else value
            for key, value in content.items()
        }

    @model_validator(mode="before")
    @classmethod
    def unwrap_scalar_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return cls.unwrap_legacy(data)
        return data


class ItemModel(ContentModel):
    """Elemento de lista; un escalar suelto se interpreta como su campo principal."""
    primary_field: ClassVar[str] = ""

    @model_validator(mode="before")
    @classmethod
    def scalar_item(cls, data: Any) -> Any:
        if isinstance(data, dict):
            # {"value": "Natural"}: escalar envuelto con una clave que no es campo del item
            if len(data) == 1 and cls.primary_field:
                (key, inner), = data.items()
                if key in WRAPPER_KEYS and key not in cls.scalar_keys() and isinstance(inner, str):
                    return {cls.primary_field: inner}
            return data
        if isinstance(data, (str, int, float)) and not isinstance(data, bool):
            primary = cls.primary_field
            return {primary: str(data)} if primary else {}
        return {}


# ===================== Registros compartidos =====================

class Cta(ContentModel):
    label: Text = "Learn More"
    href: Text = "#"


class Badge(ContentModel):
    icon: Text = "Leaf"
    text: Text = "Made in Canada"


# ===================== HeroSection =====================

class HeroContent(ContentModel):
    badge: Annotated[Badge, BeforeValidator(record_from("text"))] = Field(default_factory=Badge)
    title: Text = "Clean Beauty That Works—Made With Care in Canada"
    subtitle: Text = (
        "Luxurious hair care and skincare crafted with clean ingredients, "
        "gentle botanicals, and modern science."
    )
    primary_cta: Annotated[Cta, BeforeValidator(record_from("label"))] = Field(
        default_factory=lambda: Cta(label="Shop Bestsellers", href="#products")
    )
    secondary_cta: Annotated[Cta, BeforeValidator(record_from("label"))] = Field(
        default_factory=lambda: Cta(label="See Our Ingredients", href="#ingredients")
    )
    hero_image: Text = "https://images.unsplash.com/photo-1739980213756-753aea153bb8"
    accent_image: Text = "https://images.unsplash.com/photo-1763154045793-4be5374b3e70"


# ===================== BrandPromise =====================

class PromiseItem(ItemModel):
    primary_field: ClassVar[str] = "title"
    icon: Text = "Sparkles"
    title: Text = ""
    description: Text = ""


class BrandPromiseContent(ContentModel):
    title: Text = "Our Promise"
    promises: Annotated[List[PromiseItem], BeforeValidator(coerce_list)] = Field(
        default_factory=lambda: [
            PromiseItem(icon="MapPin", title="Made in Canada",
                        description="Crafted with clean formulas in trusted GMP-certified facilities."),
            PromiseItem(icon="FlaskConical", title="Backed by Clean Science",
                        description="Effective botanical ingredients—safe, gentle, and performance-driven."),
            PromiseItem(icon="Sparkles", title="Luxurious Yet Affordable",
                        description="Premium results without premium pricing."),
        ]
    )


# ===================== IngredientTransparency =====================

class IngredientItem(ItemModel):
    primary_field: ClassVar[str] = "name"
    name: Text = ""
    benefit: Text = ""


class IngredientTransparencyContent(ContentModel):
    title: Text = "Pure, Tested, and Transparent"
    subtitle: Text = "Every ingredient is chosen for a reason"
    ingredients: Annotated[List[IngredientItem], BeforeValidator(coerce_list)] = Field(
        default_factory=lambda: [
            IngredientItem(name="Rosemary Extract", benefit="Scalp stimulation"),
            IngredientItem(name="Peppermint Oil", benefit="Cooling + soothing"),
            IngredientItem(name="Biotin", benefit="Strengthening"),
            IngredientItem(name="Keratin", benefit="Smoothing"),
            IngredientItem(name="Natural Oils Blend", benefit="Nourish + shine"),
        ]
    )
    cta_label: Text = "See Full Ingredient Breakdown"


# ===================== FeaturedProducts =====================

class ProductCard(ItemModel):
    primary_field: ClassVar[str] = "name"
    name: Text = ""
    image: Text = ""
    benefits: TextList = Field(default_factory=list)
    badge: Text = ""
    price: Annotated[Optional[float], BeforeValidator(coerce_number)] = None

    @property
    def is_coming_soon(self) -> bool:
        return self.badge == "Coming Soon"


class FeaturedProductsContent(ContentModel):
    title: Text = "Luxivie Bestsellers"
    subtitle: Text = "Our most-loved formulas for healthier, stronger hair"
    products: Annotated[List[ProductCard], BeforeValidator(coerce_list)] = Field(
        default_factory=lambda: [
            ProductCard(
                name="Rosemary + Mint Hair Oil",
                image="https://images.unsplash.com/photo-1549049950-48d5887197a0",
                benefits=["Stimulates scalp for healthier growth", "Cooling peppermint sensation",
                          "100% natural botanical blend"],
                badge="Bestseller",
            ),
            ProductCard(
                name="Rosemary Shampoo + Conditioner Set",
                image="https://images.unsplash.com/photo-1747858989102-cca0f4dc4a11",
                benefits=["Gentle cleansing without sulfates", "Strengthens & adds shine",
                          "Safe for color-treated hair"],
            ),
            ProductCard(
                name="Biotin-Keratin Strengthening Duo",
                image="https://images.unsplash.com/photo-1739980213756-753aea153bb8",
                benefits=["Repairs damaged strands", "Reduces breakage & split ends", "Long-lasting smoothness"],
                badge="Coming Soon",
            ),
        ]
    )


# ===================== BrandStory =====================

class BrandStoryContent(ContentModel):
    title: Text = "Clean Beauty Rooted in Canada"
    paragraphs: TextList = Field(
        default_factory=lambda: [
            "Luxivie was created to bring high-quality, clean, effective, and affordable beauty to Canadians.",
            "We believe that everyone deserves access to products that are both luxurious and transparent. "
            "That's why every formula is crafted with care, using botanical ingredients backed by modern science.",
            "From our bottles to your beauty ritual, Luxivie is a promise of purity, performance, and pride.",
        ]
    )
    image: Text = "https://images.unsplash.com/photo-1763154045793-4be5374b3e70"
    image_alt: Text = "Natural botanicals"
    cta_label: Text = "Our Story"


# ===================== CustomerReviews =====================

class ReviewItem(ItemModel):
    primary_field: ClassVar[str] = "quote"
    quote: Text = ""
    name: Text = "Verified customer"
    location: Text = ""
    avatar: Text = ""
    initials: Text = ""
    rating: Annotated[float, BeforeValidator(coerce_number)] = 5

    @model_validator(mode="after")
    def fill_initials(self) -> "ReviewItem":
        if not self.initials and self.name:
            self.initials = "".join(p[0] for p in self.name.split() if p[:1].isalpha())[:2].upper()
        if not 1 <= self.rating <= 5:
            self.rating = 5
        return self


class CustomerReviewsContent(ContentModel):
    title: Text = "Customer Love"
    reviews: Annotated[List[ReviewItem], BeforeValidator(coerce_list)] = Field(
        default_factory=lambda: [
            ReviewItem(quote="My hair has never felt this full. The rosemary oil has become my holy grail product!",
                       name="Sarah M.", location="Toronto, ON", initials="SM"),
            ReviewItem(quote="Clean, fresh scent. Canadian brand I trust. Love supporting local businesses that care.",
                       name="Jessica K.", location="Vancouver, BC", initials="JK"),
            ReviewItem(quote="Affordable luxury. My new go-to. Finally found products that work without breaking the bank.",
                       name="Emily R.", location="Montreal, QC", initials="ER"),
        ]
    )


# ===================== HowToUse =====================

class StepItem(ItemModel):
    primary_field: ClassVar[str] = "title"
    number: Text = ""
    icon: Text = ""
    title: Text = ""
    description: Text = ""


class HowToUseContent(ContentModel):
    title: Text = "Your Hair Care Ritual"
    subtitle: Text = "Simple steps for transformative results"
    steps: Annotated[List[StepItem], BeforeValidator(coerce_list)] = Field(
        default_factory=lambda: [
            StepItem(number="1", icon="Droplets", title="Apply 2–3 drops to scalp",
                     description="Focus on areas that need extra care"),
            StepItem(number="2", icon="HandMetal", title="Massage gently",
                     description="Use circular motions to stimulate blood flow"),
            StepItem(number="3", icon="Clock", title="Leave overnight or 30 minutes",
                     description="Let the botanicals work their magic"),
            StepItem(number="4", icon="Sparkles", title="Rinse with Luxivie Shampoo",
                     description="For best results, use our complete system"),
        ]
    )
    cta_label: Text = "See Full Routine"

    @model_validator(mode="after")
    def number_steps(self) -> "HowToUseContent":
        for idx, step in enumerate(self.steps, 1):
            if not step.number:
                step.number = str(idx)
        return self


# ===================== Sustainability =====================

class FeatureItem(ItemModel):
    primary_field: ClassVar[str] = "title"
    title: Text = ""
    description: Text = ""


class SustainabilityContent(ContentModel):
    title: Text = "Sustainability + Quality"
    subtitle: Text = "Good for your hair, good for the planet"
    features: Annotated[List[FeatureItem], BeforeValidator(coerce_list)] = Field(
        default_factory=lambda: [
            FeatureItem(title="Clean Ingredients", description="No harmful chemicals"),
            FeatureItem(title="No Parabens / No Sulfates", description="Gentle on hair & scalp"),
            FeatureItem(title="Cruelty-Free", description="Never tested on animals"),
            FeatureItem(title="GMP Certified", description="Quality you can trust"),
            FeatureItem(title="Recyclable Packaging", description="Better for the planet"),
            FeatureItem(title="Safe for Color-Treated Hair", description="Protects your investment"),
        ]
    )


# ===================== FinalCTA =====================

class FinalCtaContent(ContentModel):
    title: Text = "Ready for stronger, healthier hair?"
    subtitle: Text = "Join thousands of Canadians who've discovered the power of clean, botanical beauty"
    cta: Annotated[Cta, BeforeValidator(record_from("label"))] = Field(
        default_factory=lambda: Cta(label="Shop Luxivie Now", href="#products")
    )
    tagline: Text = "Clean beauty crafted with care in Canada"
    image: Text = "https://images.unsplash.com/photo-1763154045793-4be5374b3e70"


# ===================== Registro =====================

CONTENT_MODELS: Dict[str, Type[ContentModel]] = {
    "HeroSection": HeroContent,
    "BrandPromise": BrandPromiseContent,
    "IngredientTransparency": IngredientTransparencyContent,
    "FeaturedProducts": FeaturedProductsContent,
    "BrandStory": BrandStoryContent,
    "CustomerReviews": CustomerReviewsContent,
    "HowToUse": HowToUseContent,
    "Sustainability": SustainabilityContent,
    "FinalCTA": FinalCtaContent,
}


def unwrap_section_content(component: str, content: Any) -> Any:
    """
    Contenido de entrega: colapsa envoltorios sólo en los campos escalares del
    componente. Registros y listas se entregan con su forma; un componente
    desconocido se entrega tal cual.
    """
    model = CONTENT_MODELS.get(component)
    if model is None or not isinstance(content, dict):
        return content
    return model.unwrap_legacy(content)
