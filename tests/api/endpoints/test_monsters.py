# tests/api/endpoints/test_monsters.py
import pytest

from chariot.core.config import settings

MONSTERS = f"{settings.API_V1_STR}/monsters"


def _mage(name, spell_ids=()):
    return {
        "name": name,
        "profile": {"type": "humanoid", "alignment": "any alignment"},
        "challenge": {"challenge_rating": 6, "experience_points": 2300},
        "stats": {"size": "Medium", "max_hit_points": 40, "armor_class": 12},
        "abilities": [{"name": "Spellcasting", "description": "The mage is a 9th-level spellcaster."}],
        "actions": {"standard": [{"name": "Dagger", "attack_bonus": 5, "damage": {"dice": "1d4+2"}}]},
        "spellcasting": [
            {
                "ability": "int",
                "save_dc": 14,
                "spell_slots_by_level": {"1": {"total": 4}},
                "spells": list(spell_ids),
            }
        ],
    }


@pytest.fixture()
def fireball_spell(seed_spell, make_block):
    return seed_spell(
        {
            "en": make_block("Fireball", srd=True, level=3, components=["V", "S", "M"]),
            "fr": make_block("Boule de feu", level=3, components=["V", "S", "M"]),
        }
    )


@pytest.fixture()
def mage_id(client, fireball_spell):
    response = client.post(f"{MONSTERS}/", json={"lang": "en", "content": _mage("Mage", [fireball_spell])})
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


def test_create_monster_populates_spells(client, fireball_spell):
    response = client.post(f"{MONSTERS}/", json={"lang": "en", "content": _mage("Mage", [fireball_spell])})

    assert response.status_code == 201
    block = response.json()["data"]["translations"]["en"]
    spell = block["spellcasting"][0]["spells"][0]
    assert spell["id"] == fireball_spell
    assert spell["lang"] == "en"
    assert spell["name"] == "Fireball"
    assert spell["srd"] is True
    assert block["srd"] is False
    assert block["stats"]["size"] == "Medium"


def test_create_monster_with_unknown_spell(client):
    response = client.post(f"{MONSTERS}/", json={"lang": "en", "content": _mage("Mage", ["no-such-spell"])})

    assert response.status_code == 400
    assert "no-such-spell" in response.json()["detail"]


def test_create_monster_invalid_payload(client):
    content = _mage("Mage")
    content["stats"]["size"] = "Colossal"
    response = client.post(f"{MONSTERS}/", json={"lang": "en", "content": content})

    assert response.status_code == 400
    assert response.json()["invalid_params"][0]["name"] == "content.stats.size"


def test_get_monster_spells_in_served_language(client, mage_id, fireball_spell):
    response = client.post(f"{MONSTERS}/{mage_id}/translations/fr", json=_mage("Mage", [fireball_spell]))
    assert response.status_code == 201

    data = client.get(f"{MONSTERS}/{mage_id}", params={"lang": "fr"}).json()["data"]
    assert data["languages"] == ["en", "fr"]
    assert data["translations"]["fr"]["spellcasting"][0]["spells"][0]["name"] == "Boule de feu"

    # No German spell translation: the spell's own first language is used
    client.post(f"{MONSTERS}/{mage_id}/translations/de", json=_mage("Magier", [fireball_spell]))
    data = client.get(f"{MONSTERS}/{mage_id}", params={"lang": "de"}).json()["data"]
    spell = data["translations"]["de"]["spellcasting"][0]["spells"][0]
    assert (spell["lang"], spell["name"]) == ("en", "Fireball")


def test_get_monster_translation_keeps_ids(client, mage_id, fireball_spell):
    response = client.get(f"{MONSTERS}/{mage_id}/translations/en")

    assert response.status_code == 200
    assert response.json()["data"]["spellcasting"][0]["spells"] == [fireball_spell]


def test_deleted_spell_is_dropped_from_monster(client, seed_spell, make_block):
    shield = seed_spell({"en": make_block("Shield", level=1, components=["V", "S"])})
    response = client.post(f"{MONSTERS}/", json={"lang": "en", "content": _mage("Mage", [shield])})
    mage_id = response.json()["data"]["id"]

    assert client.delete(f"{settings.API_V1_STR}/spells/{shield}").status_code == 200

    data = client.get(f"{MONSTERS}/{mage_id}").json()["data"]
    assert data["translations"]["en"]["spellcasting"][0]["spells"] == []


def test_search_monsters(client, mage_id, seed_monster, make_block):
    seed_monster({"en": make_block("Goblin", stats={"size": "Small"})}, tag=1)

    body = client.get(f"{MONSTERS}/", params={"name": "mag"}).json()
    assert body["pagination"]["totalItems"] == 1
    assert body["data"][0]["id"] == mage_id

    body = client.get(f"{MONSTERS}/").json()
    assert [document["translations"]["en"]["name"] for document in body["data"]] == ["Goblin", "Mage"]


def test_update_monster_translation(client, mage_id):
    response = client.patch(
        f"{MONSTERS}/{mage_id}/translations/en", json={"challenge": {"challenge_rating": 7}}
    )

    assert response.status_code == 200
    block = response.json()["data"]["translations"]["en"]
    assert block["challenge"]["challenge_rating"] == 7
    assert block["name"] == "Mage"

    assert client.patch(f"{MONSTERS}/{mage_id}/translations/en", json={"stats": None}).status_code == 400
    response = client.patch(
        f"{MONSTERS}/{mage_id}/translations/en", json={"spellcasting": [{"spells": ["no-such-spell"]}]}
    )
    assert response.status_code == 400


def test_monster_translation_lifecycle(client, mage_id):
    assert client.post(f"{MONSTERS}/{mage_id}/translations/fr", json=_mage("Mage")).status_code == 201
    assert client.post(f"{MONSTERS}/{mage_id}/translations/fr", json=_mage("Mage")).status_code == 409

    response = client.delete(f"{MONSTERS}/{mage_id}/translations/en")
    assert response.status_code == 200
    assert response.json()["data"]["remaining_languages"] == ["fr"]

    assert client.delete(f"{MONSTERS}/{mage_id}/translations/fr").status_code == 403
    assert client.get(f"{MONSTERS}/{mage_id}/translations/en").status_code == 410

    translations = client.get(f"{MONSTERS}/{mage_id}/translations").json()["data"]
    assert [t["lang"] for t in translations] == ["fr"]


def test_deleted_monster_is_gone(client, mage_id):
    assert client.delete(f"{MONSTERS}/{mage_id}").status_code == 200
    assert client.get(f"{MONSTERS}/{mage_id}").status_code == 410
    assert client.get(f"{MONSTERS}/{mage_id}/translations").status_code == 410
    assert client.get(f"{MONSTERS}/unknown-id").status_code == 404


def test_srd_monster_cannot_be_deleted_or_retagged(client, seed_monster, make_block):
    monster_id = seed_monster({"en": make_block("Goblin", srd=True, stats={"size": "Small"})}, tag=1)

    assert client.delete(f"{MONSTERS}/{monster_id}").status_code == 403
    assert client.patch(f"{MONSTERS}/{monster_id}", json={"tag": 0}).status_code == 403
    assert client.get(f"{MONSTERS}/{monster_id}").status_code == 200


def test_update_monster_translation_rejects_null_blocks(client, mage_id):
    url = f"{MONSTERS}/{mage_id}/translations/en"

    for field in ("profile", "actions", "spellcasting"):
        response = client.patch(url, json={field: None})
        assert response.status_code == 400
        assert response.json()["invalid_params"][0]["name"] == field

    assert client.get(url).json()["data"]["profile"]["type"] == "humanoid"


def test_delete_monster_returns_deletion_stamp(client, mage_id):
    response = client.delete(f"{MONSTERS}/{mage_id}")

    assert response.status_code == 200
    assert response.json()["data"]["deleted_at"] is not None
