# tests/services/test_localization_service.py
import pytest

from chariot.core.exceptions import TranslationNotFoundException
from chariot.core.translations import TranslationMap
from chariot.db.models import Spell
from chariot.services.localization_service import LocalizationService


@pytest.fixture()
def localization():
    return LocalizationService(default_locale="en")


def _spell(spell_id, translations):
    spell = Spell(id=spell_id, tag=0)
    spell.translations = translations
    spell.languages = TranslationMap(translations).active_languages()
    return spell


def test_requested_language_wins(localization, make_block):
    tmap = TranslationMap({"en": make_block("Fireball"), "fr": make_block("Boule de feu")})
    assert localization.resolve_language(tmap, "fr") == "fr"


def test_default_locale_used_without_request(localization, make_block):
    tmap = TranslationMap({"fr": make_block("Boule de feu"), "en": make_block("Fireball")})
    assert localization.resolve_language(tmap) == "en"
    assert localization.resolve_language(tmap, "") == "en"


def test_default_locale_is_configurable(make_block):
    tmap = TranslationMap({"en": make_block("Fireball"), "fr": make_block("Boule de feu")})
    assert LocalizationService(default_locale="fr").resolve_language(tmap) == "fr"


@pytest.mark.parametrize("requested", ["de", "EN", "english", "1"])
def test_absent_or_invalid_language_falls_back_to_first_active(localization, make_block, requested):
    tmap = TranslationMap(
        {
            "es": make_block("Bola de fuego", deleted=True),
            "fr": make_block("Boule de feu"),
            "en": make_block("Fireball"),
        }
    )
    assert localization.resolve_language(tmap, requested) == "fr"


def test_deleted_requested_language_falls_back(localization, make_block):
    tmap = TranslationMap({"en": make_block("Fireball", deleted=True), "fr": make_block("Boule de feu")})
    assert localization.resolve_language(tmap, "en") == "fr"


def test_no_active_translation(localization, make_block):
    tmap = TranslationMap({"en": make_block("Fireball", deleted=True)})
    assert localization.resolve_language(tmap, "en") is None


def test_resolve_and_fetch_returns_block_copy(localization, make_block):
    spell = _spell("spell-1", {"en": make_block("Fireball"), "fr": make_block("Boule de feu")})

    lang, block = localization.resolve_and_fetch(spell, "de")
    assert lang == "en"
    assert block["name"] == "Fireball"

    block["name"] = "Changed"
    assert spell.translations["en"]["name"] == "Fireball"


def test_resolve_and_fetch_without_active_translation(localization, make_block):
    spell = _spell("spell-1", {"en": make_block("Fireball", deleted=True)})

    with pytest.raises(TranslationNotFoundException):
        localization.resolve_and_fetch(spell, "en")


def test_summarize_spell(localization, make_block):
    spell = _spell(
        "spell-1",
        {
            "en": make_block("Fireball", srd=True, level=3, school="Evocation", components=["V", "S", "M"]),
            "fr": make_block("Boule de feu", level=3, school="Evocation", components=["V", "S", "M"]),
        },
    )

    summary = localization.summarize_spell(spell, "fr")
    assert summary["id"] == "spell-1"
    assert summary["lang"] == "fr"
    assert summary["name"] == "Boule de feu"
    assert summary["srd"] is False
    assert summary["components"] == ["V", "S", "M"]
    assert "created_at" not in summary

    # Missing language: the spell's first language is used
    assert localization.summarize_spell(spell, "de")["lang"] == "en"


def test_populate_spellcasting(localization, make_block):
    fireball = _spell("fireball", {"en": make_block("Fireball"), "fr": make_block("Boule de feu")})
    shield = _spell("shield", {"en": make_block("Shield")})
    block = make_block("Mage", spellcasting=[{"ability": "int", "spells": ["fireball", "shield", "gone"]}])

    populated = localization.populate_spellcasting(
        block, "fr", {"fireball": fireball, "shield": shield}
    )

    spells = populated["spellcasting"][0]["spells"]
    assert [(s["id"], s["lang"], s["name"]) for s in spells] == [
        ("fireball", "fr", "Boule de feu"),
        ("shield", "en", "Shield"),
    ]
    assert populated["spellcasting"][0]["ability"] == "int"
    # Input block is untouched
    assert block["spellcasting"][0]["spells"] == ["fireball", "shield", "gone"]
