"""
End-to-end behaviour through the public client: the dogs walkthrough and
the table-level guarantees callers rely on.
"""

import pytest

import nedis
from nedis import ItemAlreadyExistsError, ItemNotFoundError, UnregisteredSchemaError


def test_is_a_lib():
    assert isinstance(nedis.create_client(), nedis.NedisClient)


def test_validate_schema_returns_definition(dogs_client, dog_schema):
    assert dogs_client.validate_schema("dogs") is dog_schema
    with pytest.raises(UnregisteredSchemaError):
        dogs_client.validate_schema("cats")


@pytest.mark.asyncio
async def test_dogs_walkthrough(dogs_client):
    assert await dogs_client.insert("dogs", {"id": "1", "name": "ralph", "paws": "4"})
    assert await dogs_client.get("dogs", "1") == {"id": "1", "name": "ralph", "paws": "4"}

    updated = await dogs_client.update("dogs", "1", {"paws": "2"})
    assert updated == {"id": "1", "name": "ralph", "paws": "2"}

    assert await dogs_client.delete("dogs", "1") is True
    with pytest.raises(ItemNotFoundError):
        await dogs_client.get("dogs", "1")


@pytest.mark.asyncio
async def test_unregistered_cats(client):
    with pytest.raises(UnregisteredSchemaError) as excinfo:
        await client.insert("cats", {"id": "1", "name": "mittens", "paws": 3})
    assert excinfo.value.table == "cats"


@pytest.mark.asyncio
async def test_second_insert_leaves_first_record_alone(dogs_client):
    original = {"id": "1", "name": "ralph", "paws": "4"}
    await dogs_client.insert("dogs", original)
    with pytest.raises(ItemAlreadyExistsError):
        await dogs_client.insert("dogs", {"id": "1", "name": "other", "paws": "1"})
    assert await dogs_client.get_all("dogs") == [original]


@pytest.mark.asyncio
async def test_update_touches_only_given_field(dogs_client):
    await dogs_client.insert("dogs", {"id": "5", "name": "fido", "paws": "4"})
    await dogs_client.update("dogs", "5", {"name": "rover"})
    assert await dogs_client.get("dogs", "5") == {"id": "5", "name": "rover", "paws": "4"}


@pytest.mark.asyncio
async def test_tables_are_isolated(dogs_client, user_schema):
    dogs_client.register_schema(user_schema)
    await dogs_client.insert("dogs", {"id": "1", "name": "ralph", "paws": "4"})
    await dogs_client.insert("users", {"id": "1", "name": "ann", "age": "30"})

    assert await dogs_client.list_members("dogs") == ["dogs:1"]
    assert await dogs_client.list_members("users") == ["users:1"]
    await dogs_client.delete("users", "1")
    assert await dogs_client.get("dogs", "1") == {"id": "1", "name": "ralph", "paws": "4"}
    assert await dogs_client.get_all("users") == []
