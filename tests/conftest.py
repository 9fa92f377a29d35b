# tests/conftest.py
from __future__ import annotations

import os

# BD en memoria para toda la suite; debe fijarse antes de importar settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATELIMIT_ENABLED"] = "false"

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

import landing.models  # noqa: F401  (registra las tablas en la metadata)
from landing.db.base import Base
from landing.db.session import get_db
from landing.models.business import Business, RetailProduct
from landing.models.content import Page, PageSection
from landing.models.preview import PreviewToken

# Una sola conexión compartida (StaticPool) para que el esquema en memoria sobreviva
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
Base.metadata.create_all(engine)

TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db() -> Session:
    """
    Crea UNA sesión por prueba, aislada dentro de una transacción explícita.
    Al finalizar cada prueba, se hace rollback para dejar la BD limpia.
    """
    connection = engine.connect()
    trans = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture(autouse=True)
def _override_get_db(db: Session):
    """
    Override automático de get_db: todos los endpoints usan la sesión de la prueba en curso.
    """
    from landing.main import app  # import tardío para evitar ciclos

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_db, None)


class Factory:
    """Helpers para armar filas de prueba (siempre con flush, nunca commit)."""

    def __init__(self, db: Session):
        self.db = db

    def business(self, slug: str = "acme", name: str = "Acme") -> Business:
        b = Business(slug=slug, name=name)
        self.db.add(b)
        self.db.flush()
        return b

    def page(self, business: Business, slug: str = "home", status: str = "published") -> Page:
        p = Page(org_id=business.id, slug=slug, name=slug.title(), template="landing", status=status)
        self.db.add(p)
        self.db.flush()
        return p

    def section(
        self,
        page: Page,
        key: str = "hero",
        *,
        component: str = "HeroSection",
        status: str = "published",
        position: int = 0,
        published: Optional[Dict[str, Any]] = None,
        draft: Optional[Dict[str, Any]] = None,
        label: str = "",
        created_at: Optional[datetime] = None,
    ) -> PageSection:
        s = PageSection(
            page_id=page.id,
            org_id=page.org_id,
            key=key,
            label=label,
            component=component,
            position=position,
            published_content=published,
            draft_content=draft,
            status=status,
        )
        if created_at is not None:
            s.created_at = created_at
        self.db.add(s)
        self.db.flush()
        return s

    def token(
        self,
        *,
        org_id: str,
        page_id: Optional[str] = None,
        section_id: Optional[str] = None,
        expires_in: int = 3600,
        token_id: Optional[str] = None,
    ) -> PreviewToken:
        now = datetime.now(timezone.utc)
        t = PreviewToken(
            id=token_id or f"tok-{os.urandom(8).hex()}",
            org_id=org_id,
            page_id=page_id,
            section_id=section_id,
            expires_at=now + timedelta(seconds=expires_in),
            created_at=now,
        )
        self.db.add(t)
        self.db.flush()
        return t

    def product(
        self,
        business: Business,
        name: str,
        *,
        price: Any = None,
        benefits: Any = None,
        status: str = "active",
        image_url: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> RetailProduct:
        p = RetailProduct(
            business_id=business.id,
            name=name,
            price=price,
            benefits=benefits,
            status=status,
            image_url=image_url,
        )
        if created_at is not None:
            p.created_at = created_at
        self.db.add(p)
        self.db.flush()
        return p


@pytest.fixture
def make(db: Session) -> Factory:
    return Factory(db)
