from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

import landing.models  # noqa: F401
from landing.db.base import Base

ROOT = Path(__file__).resolve().parents[1]


def _constraint_names(engine):
    insp = inspect(engine)
    names = {}
    for table in sorted(Base.metadata.tables):
        names[table] = {
            "pk": insp.get_pk_constraint(table).get("name"),
            "fk": sorted(fk["name"] or "" for fk in insp.get_foreign_keys(table)),
            "ck": sorted(ck["name"] or "" for ck in insp.get_check_constraints(table)),
            "uq": sorted(uq["name"] or "" for uq in insp.get_unique_constraints(table)),
            "ix": sorted(ix["name"] for ix in insp.get_indexes(table)),
        }
    return names


def test_migration_constraint_names_match_the_models(tmp_path):
    # esquema de referencia: create_all con la naming convention de la metadata
    models_engine = create_engine(f"sqlite:///{tmp_path / 'models.db'}")
    Base.metadata.create_all(models_engine)

    migrated_engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")
    cfg = Config()
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    with migrated_engine.begin() as connection:
        cfg.attributes["connection"] = connection
        command.upgrade(cfg, "head")

    expected = _constraint_names(models_engine)
    actual = _constraint_names(migrated_engine)
    models_engine.dispose()
    migrated_engine.dispose()

    assert actual == expected
    assert actual["pages"]["pk"] == "pk_pages"
    assert "fk_page_sections_page_id_pages" in actual["page_sections"]["fk"]
    assert actual["pages"]["ck"] == ["ck_pages_page_status"]
    assert actual["page_sections"]["ck"] == ["ck_page_sections_section_status"]
