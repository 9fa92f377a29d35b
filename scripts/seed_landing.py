# scripts/seed_landing.py
from __future__ import annotations

import argparse
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

# --- Ensure repo root is on sys.path so "landing.*" imports work when run as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from landing.db.session import SessionLocal
from landing.models.business import Business, RetailProduct
from landing.models.content import Page, PageSection
from landing.security.preview_tokens import create_preview_token

# (key, label, component, published_content)
HOME_SECTIONS: List[tuple[str, str, str, Dict[str, Any]]] = [
    ("hero", "Hero", "HeroSection", {
        "badge": {"icon": "Leaf", "text": "Made in Canada"},
        "title": {"title": "Natural care for every day"},
        "subtitle": "Plant-based formulas, honest ingredients.",
        "primaryCta": {"label": "Shop Now", "href": "#products"},
        "secondaryCta": {"label": "Our Story", "href": "#story"},
    }),
    ("promise", "Brand promise", "BrandPromise", {
        "title": "Our Promise",
        "promises": [
            {"icon": "Leaf", "title": "Natural", "description": "Plant-derived ingredients."},
            {"icon": "Heart", "title": "Gentle", "description": "Kind to sensitive skin."},
        ],
    }),
    ("products", "Featured products", "FeaturedProducts", {
        "title": "Best Sellers",
        "products": [
            {"name": "Eucalyptus Balm", "price": "18.50", "benefits": ["Soothing", "Fresh", "Vegan", "Local"]},
            {"name": "Cedar Soap", "badge": "Coming Soon"},
        ],
    }),
    ("reviews", "Reviews", "CustomerReviews", {
        "reviews": [{"name": "Jane Doe", "rating": 5, "quote": "Love it."}],
    }),
    ("final-cta", "Final CTA", "FinalCTA", {
        "title": {"value": "Ready to switch?"},
        "cta": {"label": "Shop Now", "href": "#products"},
    }),
]

DEMO_PRODUCTS = [
    ("Eucalyptus Balm", Decimal("18.50"), ["Soothing", "Fresh", "Vegan", "Local"]),
    ("Cedar Soap", Decimal("9.00"), ["Gentle"]),
    ("Lavender Mist", None, []),
]


def get_or_create_business(db: Session, *, slug: str, name: str) -> Business:
    b = db.scalar(select(Business).where(Business.slug == slug))
    if b:
        return b
    b = Business(slug=slug, name=name)
    db.add(b)
    db.flush()
    return b


def get_or_create_page(db: Session, *, business: Business, slug: str) -> Page:
    p = db.scalar(select(Page).where(and_(Page.org_id == business.id, Page.slug == slug)))
    if p:
        return p
    p = Page(org_id=business.id, slug=slug, name=slug.title(), template="landing", status="published")
    db.add(p)
    db.flush()
    return p


def upsert_sections(db: Session, page: Page) -> int:
    created = 0
    for position, (key, label, component, content) in enumerate(HOME_SECTIONS):
        s = db.scalar(select(PageSection).where(and_(PageSection.page_id == page.id, PageSection.key == key)))
        if s is None:
            s = PageSection(page_id=page.id, org_id=page.org_id, key=key)
            db.add(s)
            created += 1
        s.label = label
        s.component = component
        s.position = position
        s.published_content = content
        s.status = "published"
    db.flush()
    return created


def seed_products(db: Session, business: Business) -> int:
    existing = set(db.scalars(select(RetailProduct.name).where(RetailProduct.business_id == business.id)).all())
    created = 0
    for name, price, benefits in DEMO_PRODUCTS:
        if name in existing:
            continue
        db.add(RetailProduct(business_id=business.id, name=name, price=price, benefits=benefits, status="active"))
        created += 1
    db.flush()
    return created


def run(business_slug: str, business_name: str, page_slug: str, with_token: bool) -> None:
    db: Session = SessionLocal()
    try:
        business = get_or_create_business(db, slug=business_slug, name=business_name)
        page = get_or_create_page(db, business=business, slug=page_slug)
        n_sections = upsert_sections(db, page)
        n_products = seed_products(db, business)

        token = None
        if with_token:
            token = create_preview_token(db, org_id=business.id, page_id=page.id, user_id="seed")

        db.commit()
        print(f"[OK] Business id={business.id} slug={business.slug}")
        print(f"[OK] Page id={page.id} slug={page.slug} (+{n_sections} sections)")
        print(f"[OK] Products +{n_products}")
        if token is not None:
            print(f"[OK] Preview token (expires {token.expires_at.isoformat()}): {token.id}")
    finally:
        db.close()


def main():
    ap = argparse.ArgumentParser(
        description="Seed a demo business with a landing page, sections and products.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--business-slug", default="default")
    ap.add_argument("--business-name", default="Demo Business")
    ap.add_argument("--page-slug", default="home")
    ap.add_argument("--no-token", action="store_true", help="No emitir preview token")
    args = ap.parse_args()

    run(args.business_slug, args.business_name, args.page_slug, with_token=not args.no_token)


if __name__ == "__main__":
    main()
