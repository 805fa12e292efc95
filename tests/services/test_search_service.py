# tests/services/test_search_service.py
import pytest
from sqlalchemy.dialects import sqlite

from chariot.core.exceptions import InvalidLanguageCodeException, ValidationException
from chariot.db.models import Spell
from chariot.repositories.spell_repository import SpellRepository
from chariot.services.search_service import (
    SearchCriteria,
    TranslationSearchBuilder,
    escape_like,
    resolve_page_size,
)


@pytest.fixture()
def builder():
    return TranslationSearchBuilder(Spell)


def _sql(clauses):
    return [str(clause.compile(dialect=sqlite.dialect())) for clause in clauses]


def test_escape_like():
    assert escape_like("50%_off") == "50\\%\\_off"
    assert escape_like("back\\slash") == "back\\\\slash"
    assert escape_like("Fireball") == "Fireball"


def test_resolve_page_size():
    assert resolve_page_size(None, 10, 100) == 10
    assert resolve_page_size(25, 10, 100) == 25
    assert resolve_page_size(1000, 10, 100) == 100
    assert resolve_page_size(0, 10, 100) == 1
    assert resolve_page_size(None, 500, 100) == 100


def test_default_order_is_tag_then_id(builder):
    assert _sql(builder.order_by()) == ["spells.tag DESC", "spells.id ASC"]


def test_explicit_sort_field_comes_first(builder):
    assert _sql(builder.order_by("-createdAt")) == [
        "spells.created_at DESC",
        "spells.tag DESC",
        "spells.id ASC",
    ]
    assert _sql(builder.order_by("tag")) == ["spells.tag ASC", "spells.id ASC"]
    assert _sql(builder.order_by("-id")) == ["spells.id DESC", "spells.tag DESC"]


def test_unknown_sort_field(builder):
    with pytest.raises(ValidationException):
        builder.order_by("translations")


def test_build_without_filters_excludes_deleted_only(builder):
    criteria = builder.build()
    assert len(criteria.conditions) == 1
    assert criteria.languages is None
    assert not criteria.requires_post_filter


def test_build_with_invalid_lang(builder):
    with pytest.raises(InvalidLanguageCodeException):
        builder.build(lang="french")


def test_build_with_lang_projects_to_it(builder):
    criteria = builder.build(name="fire", lang="en")
    assert criteria.languages == ["en"]
    assert not criteria.requires_post_filter
    assert len(criteria.conditions) == 2


def test_build_name_without_known_languages_matches_nothing(builder, db):
    criteria = builder.build(name="fire", known_languages=[])
    assert criteria.requires_post_filter
    assert SpellRepository(db).count_matching(criteria) == 0


def test_project_narrows_to_matching_names(make_block):
    spell = Spell(id="spell-1", tag=0)
    spell.translations = {
        "en": make_block("Fireball"),
        "fr": make_block("Boule de feu"),
        "es": make_block("Bola de FIREBALL", deleted=True),
    }

    assert SearchCriteria(name_filter="fireBALL").project(spell) == ["en"]
    assert SearchCriteria(languages=["fr"]).project(spell) == ["fr"]
    assert SearchCriteria().project(spell) is None


def test_cross_language_name_search(builder, db, seed_spell, make_block):
    fireball_id = seed_spell({"en": make_block("Fireball"), "fr": make_block("Boule de feu")})
    seed_spell({"fr": make_block("Fireball pour les nuls")}, tag=1)
    seed_spell({"en": make_block("Shield")})
    seed_spell({"en": make_block("Fireball"), "fr": make_block("Boule de feu")}, deleted=True)
    seed_spell({"en": make_block("Fireball", deleted=True), "de": make_block("Feuerball")})

    repository = SpellRepository(db)
    known = repository.distinct_languages()
    assert sorted(known) == ["de", "en", "fr"]

    criteria = builder.build(name="fireball", known_languages=known)
    results = repository.search(criteria, builder.order_by())

    assert repository.count_matching(criteria) == 2
    # Certified first, then the homebrew one
    assert [spell.tag for spell in results] == [1, 0]
    assert results[1].id == fireball_id
    assert [criteria.project(spell) for spell in results] == [["fr"], ["en"]]


def test_lang_search_requires_active_block(builder, db, seed_spell, make_block):
    seed_spell({"en": make_block("Fireball"), "fr": make_block("Boule de feu")})
    seed_spell({"en": make_block("Shield")})
    seed_spell({"en": make_block("Light"), "fr": make_block("Lumière", deleted=True)})

    repository = SpellRepository(db)
    criteria = builder.build(lang="fr")
    results = repository.search(criteria, builder.order_by())

    assert [spell.translations["fr"]["name"] for spell in results] == ["Boule de feu"]


def test_name_search_treats_wildcards_literally(builder, db, seed_spell, make_block):
    seed_spell({"en": make_block("100% Fire")})
    seed_spell({"en": make_block("1000 Fires")})

    repository = SpellRepository(db)
    criteria = builder.build(name="100%", lang="en")
    results = repository.search(criteria)

    assert [spell.translations["en"]["name"] for spell in results] == ["100% Fire"]
