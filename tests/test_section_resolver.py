from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from landing.services.section_service import has_content, resolve_sections


# -----------------------------
# has_content
# -----------------------------
def test_has_content_rules():
    assert has_content({"title": "Hi"}) is True
    assert has_content({"items": [{}]}) is True
    assert has_content({"n": 0}) is True
    assert has_content({"flag": False}) is True
    assert has_content({}) is False
    assert has_content(None) is False
    assert has_content({"title": "   ", "sub": None, "obj": {}, "list": []}) is False
    assert has_content("not a dict") is False


# -----------------------------
# Escenarios de resolución
# -----------------------------
def test_public_published_section(db: Session, make):
    b = make.business(slug="acme")
    p = make.page(b)
    make.section(p, published={"title": "Hi"}, draft={})

    res = resolve_sections(db, p.id)
    assert res.is_draft_mode is False
    assert len(res.sections) == 1
    assert res.sections[0].content == {"title": "Hi"}


def test_draft_section_hidden_publicly_but_visible_in_preview(db: Session, make):
    b = make.business(slug="acme")
    p = make.page(b)
    make.section(p, status="draft", published={"title": "Hi"}, draft={})
    t = make.token(org_id=b.id, page_id=p.id)

    assert resolve_sections(db, p.id).sections == []

    res = resolve_sections(db, p.id, t.id, org_id=b.id)
    assert res.is_draft_mode is True
    assert len(res.sections) == 1
    sec = res.sections[0]
    assert sec.draft_content == {}
    # draft vacío → cae a published
    assert sec.content == {"title": "Hi"}


def test_dirty_section_with_empty_published_falls_back_to_draft(db: Session, make):
    b = make.business(slug="acme")
    p = make.page(b)
    make.section(p, status="dirty", published={}, draft={"title": "Draft Hi"})

    res = resolve_sections(db, p.id)
    assert [s.content for s in res.sections] == [{"title": "Draft Hi"}]


def test_precedence_by_mode(db: Session, make):
    b = make.business()
    p = make.page(b)
    make.section(p, status="dirty", published={"title": "Live"}, draft={"title": "Next"})
    t = make.token(org_id=b.id, page_id=p.id)

    assert resolve_sections(db, p.id).sections[0].content == {"title": "Live"}
    assert resolve_sections(db, p.id, t.id).sections[0].content == {"title": "Next"}


def test_sections_without_any_content_are_hidden_publicly(db: Session, make):
    b = make.business()
    p = make.page(b)
    make.section(p, key="empty", published={}, draft=None)
    make.section(p, key="blank", position=1, published={"title": "  "}, draft={"sub": None})
    t = make.token(org_id=b.id, page_id=p.id)

    assert resolve_sections(db, p.id).sections == []

    preview = resolve_sections(db, p.id, t.id)
    assert [s.key for s in preview.sections] == ["empty", "blank"]
    assert all(s.content == {} for s in preview.sections)


def test_malformed_content_is_tolerated(db: Session, make):
    b = make.business()
    p = make.page(b)
    make.section(p, published=["not", "an", "object"], draft={"title": "ok"}, status="dirty")

    res = resolve_sections(db, p.id)
    assert res.sections[0].content == {"title": "ok"}
    assert res.sections[0].published_content == {}


def test_invalid_token_means_public_view(db: Session, make):
    b = make.business()
    p = make.page(b)
    make.section(p, key="live", published={"title": "Live"})
    make.section(p, key="wip", status="draft", draft={"title": "WIP"}, position=1)
    expired = make.token(org_id=b.id, page_id=p.id, expires_in=-1)

    for token in ("garbage", expired.id):
        res = resolve_sections(db, p.id, token)
        assert res.is_draft_mode is False
        assert [s.key for s in res.sections] == ["live"]


def test_token_for_another_page_or_org_is_rejected(db: Session, make):
    b = make.business()
    other = make.business(slug="other", name="Other")
    p = make.page(b)
    p2 = make.page(b, slug="about")
    make.section(p, status="draft", draft={"title": "WIP"})

    wrong_page = make.token(org_id=b.id, page_id=p2.id)
    wrong_org = make.token(org_id=other.id, page_id=p.id)

    assert resolve_sections(db, p.id, wrong_page.id, org_id=b.id).is_draft_mode is False
    assert resolve_sections(db, p.id, wrong_org.id, org_id=b.id).is_draft_mode is False


def test_order_by_position_then_creation(db: Session, make):
    b = make.business()
    p = make.page(b)
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    make.section(p, key="c", position=2, published={"t": "c"}, created_at=base)
    make.section(p, key="b2", position=1, published={"t": "b2"}, created_at=base + timedelta(seconds=5))
    make.section(p, key="b1", position=1, published={"t": "b1"}, created_at=base)
    make.section(p, key="a", position=0, published={"t": "a"}, created_at=base + timedelta(seconds=9))

    assert [s.key for s in resolve_sections(db, p.id).sections] == ["a", "b1", "b2", "c"]


# -----------------------------
# Hero: badge capturado como contenido completo
# -----------------------------
def test_hero_badge_only_draft_falls_back_to_published(db: Session, make, caplog):
    b = make.business()
    p = make.page(b)
    published = {"badge": {"icon": "Leaf", "text": "Local"}, "title": "Welcome", "subtitle": "Hi"}
    make.section(p, status="dirty", published=published, draft={"icon": "Leaf", "text": "Local"})
    t = make.token(org_id=b.id, page_id=p.id)

    with caplog.at_level(logging.WARNING, logger="landing.services.section_service"):
        res = resolve_sections(db, p.id, t.id)
    assert res.sections[0].content == published
    assert "captured badge" in caplog.text


def test_badge_shape_on_other_components_is_untouched(db: Session, make):
    b = make.business()
    p = make.page(b)
    make.section(
        p, component="BrandPromise", status="dirty",
        published={"title": "A", "promises": ["x"], "extra": 1}, draft={"icon": "Leaf", "text": "Local"},
    )
    t = make.token(org_id=b.id, page_id=p.id)

    assert resolve_sections(db, p.id, t.id).sections[0].content == {"icon": "Leaf", "text": "Local"}


# -----------------------------
# Errores de store
# -----------------------------
def test_section_fetch_error_returns_empty_list(db: Session, make, monkeypatch):
    b = make.business()
    p = make.page(b)
    t = make.token(org_id=b.id, page_id=p.id)

    import landing.services.section_service as section_service

    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    rollbacks = []
    monkeypatch.setattr(section_service, "fetch_page_sections", _boom)
    monkeypatch.setattr(db, "rollback", lambda: rollbacks.append(True))

    res = resolve_sections(db, p.id, t.id)
    assert res.sections == []
    assert res.is_draft_mode is True
    assert rollbacks == [True]


def test_token_lookup_error_rolls_back_and_serves_public_sections(db: Session, make, monkeypatch):
    b = make.business()
    p = make.page(b)
    make.section(p, key="live", published={"title": "Live"})
    make.section(p, key="wip", status="draft", draft={"title": "WIP"}, position=1)
    t = make.token(org_id=b.id, page_id=p.id)

    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    rollbacks = []
    monkeypatch.setattr(db, "get", _boom)
    monkeypatch.setattr(db, "rollback", lambda: rollbacks.append(True))

    res = resolve_sections(db, p.id, t.id, org_id=b.id)
    assert res.is_draft_mode is False
    assert [s.key for s in res.sections] == ["live"]
    assert rollbacks == [True]
