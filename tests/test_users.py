"""
Tests de usuarios
"""
import pytest

from petstore.errors import InvalidInput, MissingUser, RedundantUsername
from petstore.schemas.user import User

@pytest.mark.asyncio
async def test_add_user_returns_username(db):
    assert await db.add_user(User(username="ana", email="ana@test.com")) == "ana"
    assert await db.add_user(User(username="bea")) == "bea"
    assert (await db.get_user("bea")).id == 1

@pytest.mark.asyncio
async def test_duplicate_username_is_rejected(db):
    await db.add_user(User(username="ana"))
    with pytest.raises(RedundantUsername):
        await db.add_user(User(username="ana", phone="600"))
    assert len(db.users) == 1
    # distingue mayúsculas
    assert await db.add_user(User(username="Ana")) == "Ana"

@pytest.mark.asyncio
async def test_duplicate_is_checked_before_id(db):
    await db.add_user(User(username="ana"))
    with pytest.raises(RedundantUsername):
        await db.add_user(User(id=7, username="ana"))

@pytest.mark.asyncio
async def test_add_user_with_id_is_rejected(db):
    with pytest.raises(InvalidInput):
        await db.add_user(User(id=0, username="ana"))
    assert len(db.users) == 0

@pytest.mark.asyncio
async def test_get_missing_user(db):
    with pytest.raises(MissingUser):
        await db.get_user("nadie")

@pytest.mark.asyncio
async def test_delete_user(db):
    await db.add_user(User(username="ana"))
    await db.delete_user("ana")
    with pytest.raises(MissingUser):
        await db.get_user("ana")
    with pytest.raises(MissingUser):
        await db.delete_user("ana")

@pytest.mark.asyncio
async def test_update_user_keeps_existing_id(db):
    await db.add_user(User(username="ana"))
    await db.add_user(User(username="bea", phone="1"))

    updated = await db.update_user(User(id=42, username="bea", phone="2"))
    assert updated.id == 1
    stored = await db.get_user("bea")
    assert stored.id == 1 and stored.phone == "2"

    updated = await db.update_user(User(username="ana", email="a@x.com"))
    assert updated.id == 0

@pytest.mark.asyncio
async def test_update_unknown_user(db):
    await db.add_user(User(username="ana", phone="1"))
    with pytest.raises(MissingUser):
        await db.update_user(User(username="otra", phone="2"))
    assert (await db.get_user("ana")).phone == "1"
    assert len(db.users) == 1

@pytest.mark.asyncio
async def test_add_users_stops_at_first_failure(db):
    await db.add_user(User(username="ana"))
    with pytest.raises(RedundantUsername):
        await db.add_users([User(username="bea"), User(username="ana"), User(username="cris")])
    # bea queda creada, cris no
    assert (await db.get_user("bea")).id == 1
    with pytest.raises(MissingUser):
        await db.get_user("cris")

@pytest.mark.asyncio
async def test_read_user_is_a_copy(db):
    await db.add_user(User(username="ana", phone="1"))
    got = await db.get_user("ana")
    got.id = 33
    got.phone = "2"
    stored = await db.get_user("ana")
    assert stored.id == 0 and stored.phone == "1"

    updated = await db.update_user(User(username="ana", phone="3"))
    updated.id = 8
    assert (await db.get_user("ana")).id == 0
