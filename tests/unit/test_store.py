"""Unit tests for the in-memory game store (neuroquest/db/store.py)"""
import pytest

from neuroquest.db.store import InMemoryGameStore
from neuroquest.exceptions import PersistenceConflictError, RecordNotFoundError
from neuroquest.models.attributes import Attributes
from neuroquest.models.progression import ProgressionState


@pytest.mark.asyncio
async def test_create_and_load_user(game_store, test_user_id):
    """Test a created user loads at version 1"""
    snapshot = await game_store.load_snapshot(test_user_id)

    assert snapshot.version == 1
    assert snapshot.progression == ProgressionState(level=1, experience=0, currency=100)
    assert snapshot.attributes == Attributes()
    assert await game_store.user_exists(test_user_id) is True
    assert await game_store.load_progression_state(test_user_id) == snapshot.progression
    assert await game_store.load_attributes(test_user_id) == snapshot.attributes


@pytest.mark.asyncio
async def test_create_user_twice_conflicts(game_store, test_user_id):
    """Test creating an existing user is rejected"""
    with pytest.raises(PersistenceConflictError):
        await game_store.create_user(test_user_id, ProgressionState(), Attributes())


@pytest.mark.asyncio
async def test_unknown_user():
    """Test loading an unknown user raises RecordNotFoundError"""
    store = InMemoryGameStore()

    with pytest.raises(RecordNotFoundError) as exc_info:
        await store.load_snapshot("ghost")

    assert exc_info.value.record_type == "User"
    assert await store.user_exists("ghost") is False


@pytest.mark.asyncio
async def test_save_bumps_version(game_store, test_user_id):
    """Test every write increments the version"""
    version = await game_store.save_attributes(test_user_id, Attributes(mood=90))
    assert version == 2

    version = await game_store.save_progression_state(
        test_user_id, ProgressionState(currency=5), expected_version=2
    )
    assert version == 3

    snapshot = await game_store.load_snapshot(test_user_id)
    assert snapshot.attributes.mood == 90
    assert snapshot.progression.currency == 5


@pytest.mark.asyncio
async def test_stale_write_conflicts(game_store, test_user_id):
    """Test a write with an outdated version is rejected and changes nothing"""
    await game_store.save_attributes(test_user_id, Attributes(mood=90))

    with pytest.raises(PersistenceConflictError) as exc_info:
        await game_store.save_attributes(test_user_id, Attributes(mood=10), expected_version=1)

    assert exc_info.value.expected_version == 1
    assert exc_info.value.actual_version == 2
    assert (await game_store.load_attributes(test_user_id)).mood == 90


@pytest.mark.asyncio
async def test_commit_writes_everything(game_store, test_user_id, quest_factory):
    """Test commit stores progression, attributes and quests together"""
    quest = quest_factory(xp_reward=10)
    await game_store.add_quest(quest)

    done = quest.model_copy(update={"completed": True})
    version = await game_store.commit(
        test_user_id,
        expected_version=1,
        progression=ProgressionState(level=1, experience=10, currency=100),
        attributes=Attributes(vitality=51),
        quests=[done],
    )

    assert version == 2
    assert (await game_store.load_quest(quest.id)).completed is True
    assert (await game_store.load_progression_state(test_user_id)).experience == 10
    assert (await game_store.load_attributes(test_user_id)).vitality == 51


@pytest.mark.asyncio
async def test_commit_conflict_writes_nothing(game_store, test_user_id, quest_factory):
    """Test a conflicting commit leaves every record untouched"""
    quest = quest_factory(xp_reward=10)
    await game_store.add_quest(quest)
    await game_store.save_attributes(test_user_id, Attributes(mood=70))

    with pytest.raises(PersistenceConflictError):
        await game_store.commit(
            test_user_id,
            expected_version=1,
            progression=ProgressionState(currency=999),
            quests=[quest.model_copy(update={"completed": True})],
        )

    assert (await game_store.load_quest(quest.id)).completed is False
    assert (await game_store.load_progression_state(test_user_id)).currency == 100


@pytest.mark.asyncio
async def test_commit_unknown_quest(game_store, test_user_id, quest_factory):
    """Test committing a quest that is not in the catalog fails up front"""
    with pytest.raises(RecordNotFoundError):
        await game_store.commit(test_user_id, expected_version=1, quests=[quest_factory("nope")])

    assert (await game_store.load_snapshot(test_user_id)).version == 1


@pytest.mark.asyncio
async def test_list_quests_filters(game_store, test_user_id, quest_factory):
    """Test quests are listed per user and by completion"""
    await game_store.add_quest(quest_factory("a"))
    await game_store.add_quest(quest_factory("b", completed=True))
    await game_store.add_quest(quest_factory("c", user_id="other"))

    assert {q.id for q in await game_store.list_quests(test_user_id)} == {"a", "b"}
    assert [q.id for q in await game_store.list_quests(test_user_id, completed=False)] == ["a"]
    assert [q.id for q in await game_store.list_quests(test_user_id, completed=True)] == ["b"]


@pytest.mark.asyncio
async def test_items(game_store):
    """Test store items load by id"""
    item = await game_store.load_item("potion")
    assert item.price == 40

    with pytest.raises(RecordNotFoundError):
        await game_store.load_item("sword")
