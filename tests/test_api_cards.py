"""Tests for card collection endpoints."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def created_card(client: AsyncClient, alice, charizard) -> dict:
    response = await client.post("/cards", json=charizard, headers=alice)
    assert response.status_code == 201
    return response.json()


class TestListCards:
    async def test_empty_collection(self, client: AsyncClient, alice) -> None:
        response = await client.get("/cards", headers=alice)

        assert response.status_code == 200
        assert response.json() == []

    async def test_lists_only_own_cards(
        self, client: AsyncClient, alice, bob, created_card, charizard
    ) -> None:
        await client.post("/cards", json={**charizard, "name": "Pikachu"}, headers=bob)

        alice_cards = (await client.get("/cards", headers=alice)).json()
        bob_cards = (await client.get("/cards", headers=bob)).json()

        assert [c["name"] for c in alice_cards] == ["Charizard"]
        assert [c["name"] for c in bob_cards] == ["Pikachu"]

    async def test_newest_first(self, client: AsyncClient, alice, charizard) -> None:
        for name in ("First", "Second", "Third"):
            await client.post("/cards", json={**charizard, "name": name}, headers=alice)

        cards = (await client.get("/cards", headers=alice)).json()

        assert [c["name"] for c in cards] == ["Third", "Second", "First"]

    async def test_count(self, client: AsyncClient, alice, created_card) -> None:
        response = await client.get("/cards/count", headers=alice)

        assert response.json() == {"count": 1}


class TestCreateCard:
    async def test_create_assigns_server_fields(self, created_card: dict) -> None:
        assert created_card["kind"] == "card"
        assert created_card["id"]
        assert created_card["owner"] == "alice"
        assert created_card["createdAt"]
        assert created_card["price"] == 150.0
        assert created_card["image"] == "/images/default-card.jpg"
        assert created_card["rarity"] == "Common"

    async def test_read_returns_same_fields(
        self, client: AsyncClient, alice, created_card: dict
    ) -> None:
        response = await client.get(f"/cards/{created_card['id']}", headers=alice)

        assert response.status_code == 200
        assert response.json() == created_card

    async def test_owner_in_body_is_ignored(self, client: AsyncClient, alice, charizard) -> None:
        response = await client.post(
            "/cards", json={**charizard, "owner": "mallory"}, headers=alice
        )

        assert response.json()["owner"] == "alice"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("condition", "Pristine"),
            ("condition", "Any"),
            ("type", "Baseball"),
        ],
    )
    async def test_invalid_enum_rejected(
        self, client: AsyncClient, alice, charizard, field, value
    ) -> None:
        response = await client.post("/cards", json={**charizard, field: value}, headers=alice)

        assert response.status_code == 422
        failure = response.json()["failure"]
        assert failure["kind"] == "validation_failed"
        assert field in failure["fields"]

        # Nothing persisted
        assert (await client.get("/cards/count", headers=alice)).json() == {"count": 0}

    async def test_missing_fields_reported_per_field(self, client: AsyncClient, alice) -> None:
        response = await client.post("/cards", json={"name": "Charizard"}, headers=alice)

        assert response.status_code == 422
        fields = response.json()["failure"]["fields"]
        assert fields["set"] == "Please provide a set name"
        assert fields["condition"] == "Please provide a condition"
        assert fields["price"] == "Please provide a price"
        assert fields["type"] == "Please specify the type of card"

    @pytest.mark.parametrize(
        ("field", "value", "limit"),
        [("name", "x" * 256, 255), ("set", "x" * 256, 255), ("rarity", "x" * 65, 64)],
    )
    async def test_overlong_text_rejected(
        self, client: AsyncClient, alice, charizard, field, value, limit
    ) -> None:
        response = await client.post("/cards", json={**charizard, field: value}, headers=alice)

        assert response.status_code == 422
        assert response.json()["failure"]["fields"] == {
            field: f"Must be at most {limit} characters"
        }
        assert (await client.get("/cards/count", headers=alice)).json() == {"count": 0}

    async def test_negative_price_rejected(self, client: AsyncClient, alice, charizard) -> None:
        response = await client.post("/cards", json={**charizard, "price": -5}, headers=alice)

        assert response.status_code == 422
        assert "price" in response.json()["failure"]["fields"]


class TestUpdateCard:
    async def test_update_replaces_fields(
        self, client: AsyncClient, alice, created_card: dict
    ) -> None:
        new_fields = {
            "name": "Charizard (1st Edition)",
            "set": "Base Set",
            "condition": "Mint",
            "price": 5000,
            "type": "Pokemon",
            "rarity": "Holo Rare",
            "image": "https://example.com/zard.png",
        }

        response = await client.put(f"/cards/{created_card['id']}", json=new_fields, headers=alice)

        assert response.status_code == 200
        updated = response.json()
        for key, value in new_fields.items():
            assert updated[key] == value
        assert updated["id"] == created_card["id"]
        assert updated["owner"] == created_card["owner"]
        assert updated["createdAt"] == created_card["createdAt"]

        fetched = (await client.get(f"/cards/{created_card['id']}", headers=alice)).json()
        assert fetched == updated

    async def test_update_resets_omitted_optional_fields(
        self, client: AsyncClient, alice, charizard
    ) -> None:
        created = (
            await client.post("/cards", json={**charizard, "rarity": "Holo Rare"}, headers=alice)
        ).json()

        updated = (
            await client.put(f"/cards/{created['id']}", json=charizard, headers=alice)
        ).json()

        assert updated["rarity"] == "Common"

    async def test_update_missing_card(self, client: AsyncClient, alice, charizard) -> None:
        response = await client.put("/cards/does-not-exist", json=charizard, headers=alice)

        assert response.status_code == 404
        assert response.json()["failure"]["kind"] == "not_found"

    async def test_update_invalid_enum(
        self, client: AsyncClient, alice, created_card, charizard
    ) -> None:
        response = await client.put(
            f"/cards/{created_card['id']}",
            json={**charizard, "condition": "Shiny"},
            headers=alice,
        )

        assert response.status_code == 422


class TestDeleteCard:
    async def test_delete(self, client: AsyncClient, alice, created_card: dict) -> None:
        response = await client.delete(f"/cards/{created_card['id']}", headers=alice)

        assert response.status_code == 204
        assert (await client.get("/cards", headers=alice)).json() == []

    async def test_second_delete_is_not_found(
        self, client: AsyncClient, alice, created_card: dict
    ) -> None:
        await client.delete(f"/cards/{created_card['id']}", headers=alice)

        response = await client.delete(f"/cards/{created_card['id']}", headers=alice)

        assert response.status_code == 404
        assert response.json()["failure"]["message"] == "Card not found"

    async def test_get_after_delete(self, client: AsyncClient, alice, created_card: dict) -> None:
        await client.delete(f"/cards/{created_card['id']}", headers=alice)

        response = await client.get(f"/cards/{created_card['id']}", headers=alice)

        assert response.status_code == 404


class TestOwnership:
    async def test_other_user_cannot_read(
        self, client: AsyncClient, bob, created_card: dict
    ) -> None:
        response = await client.get(f"/cards/{created_card['id']}", headers=bob)

        assert response.status_code == 404

    async def test_other_user_cannot_update(
        self, client: AsyncClient, bob, created_card: dict, charizard
    ) -> None:
        response = await client.put(
            f"/cards/{created_card['id']}", json={**charizard, "price": 1}, headers=bob
        )

        assert response.status_code == 404

    async def test_other_user_cannot_delete(
        self, client: AsyncClient, alice, bob, created_card: dict
    ) -> None:
        response = await client.delete(f"/cards/{created_card['id']}", headers=bob)

        assert response.status_code == 404
        assert len((await client.get("/cards", headers=alice)).json()) == 1
