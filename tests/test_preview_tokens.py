from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from landing.security.preview_tokens import create_preview_token, validate_preview_token


def test_valid_token_with_matching_scope(db: Session, make):
    b = make.business()
    p = make.page(b)
    t = make.token(org_id=b.id, page_id=p.id)

    res = validate_preview_token(db, t.id, org_id=b.id, page_id=p.id)
    assert res.valid is True
    assert res.reason is None
    assert res.token is not None and res.token.id == t.id


def test_unknown_token_is_invalid(db: Session):
    res = validate_preview_token(db, "does-not-exist")
    assert res.valid is False
    assert res.reason == "Token not found"


def test_empty_token_is_invalid(db: Session):
    res = validate_preview_token(db, "")
    assert res.valid is False


def test_expired_one_second_ago(db: Session, make):
    b = make.business()
    p = make.page(b)
    t = make.token(org_id=b.id, page_id=p.id, expires_in=-1)

    res = validate_preview_token(db, t.id, org_id=b.id, page_id=p.id)
    assert res.valid is False
    assert "expired" in res.reason.lower()


def test_expiry_boundary_is_exclusive(db: Session, make):
    b = make.business()
    t = make.token(org_id=b.id)
    exp = t.expires_at

    assert validate_preview_token(db, t.id, now=exp - timedelta(seconds=1)).valid is True
    assert validate_preview_token(db, t.id, now=exp).valid is False


def test_scope_mismatches(db: Session, make):
    b = make.business()
    other = make.business(slug="other", name="Other")
    p = make.page(b)
    p2 = make.page(b, slug="about")
    s = make.section(p, published={"title": "Hi"})
    t = make.token(org_id=b.id, page_id=p.id, section_id=s.id)

    assert validate_preview_token(db, t.id, org_id=other.id).reason == "Token does not match organization"
    assert validate_preview_token(db, t.id, page_id=p2.id).reason == "Token does not match page"
    assert validate_preview_token(db, t.id, section_id="nope").reason == "Token does not match section"


def test_scopes_not_requested_are_not_checked(db: Session, make):
    b = make.business()
    p = make.page(b)
    t = make.token(org_id=b.id, page_id=p.id)

    assert validate_preview_token(db, t.id).valid is True
    assert validate_preview_token(db, t.id, org_id=b.id).valid is True


def test_org_wide_token_does_not_unlock_a_page_scope(db: Session, make):
    b = make.business()
    p = make.page(b)
    t = make.token(org_id=b.id)

    res = validate_preview_token(db, t.id, org_id=b.id, page_id=p.id)
    assert res.valid is False
    assert res.reason == "Token does not match page"


def test_validation_does_not_consume_token(db: Session, make):
    b = make.business()
    t = make.token(org_id=b.id)
    for _ in range(3):
        assert validate_preview_token(db, t.id).valid is True


def test_create_preview_token_uses_configured_ttl(db: Session, make):
    b = make.business()
    p = make.page(b)
    before = datetime.now(timezone.utc)
    t = create_preview_token(db, org_id=b.id, page_id=p.id, user_id="editor-1", expires_in=120)

    assert len(t.id) >= 32
    assert t.expires_at >= before + timedelta(seconds=119)
    assert validate_preview_token(db, t.id, org_id=b.id, page_id=p.id).valid is True


def test_store_error_is_reported_as_invalid(db: Session, monkeypatch):
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    rollbacks = []
    monkeypatch.setattr(db, "get", _boom)
    monkeypatch.setattr(db, "rollback", lambda: rollbacks.append(True))
    res = validate_preview_token(db, "whatever")
    assert res.valid is False
    assert res.reason == "Token lookup failed"
    # la sesión queda usable para las consultas que siguen en el request
    assert rollbacks == [True]


def test_token_is_never_logged_in_full(db: Session, make, caplog):
    b = make.business()
    t = make.token(org_id=b.id, expires_in=-5, token_id="secret-token-value-1234567890")

    with caplog.at_level(logging.INFO, logger="landing.security.preview_tokens"):
        validate_preview_token(db, t.id)
        validate_preview_token(db, "another-secret-value-abcdef")

    text = caplog.text
    assert "secret-token-value-1234567890" not in text
    assert "another-secret-value-abcdef" not in text
