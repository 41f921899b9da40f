import json
from datetime import datetime, timedelta, timezone

import pytest

from dal.chat_session_dal import STORAGE_KEY, ChatSessionDAL, deserialize_sessions, serialize_sessions
from dal.local_storage import LocalStorage
from models.chat_models import ChatSession, Message

T0 = datetime(2025, 3, 14, 9, 26, 53, 589793, tzinfo=timezone.utc)


def _sessions():
    messages = (
        Message(id="m1", chat_id="c1", role="user", content="upload", timestamp=T0, image="file:///cat.jpg", is_image_upload=True),
        Message(id="m2", chat_id="c1", role="assistant", content="describe it", timestamp=T0 + timedelta(seconds=1)),
        Message(
            id="m3",
            chat_id="c1",
            role="assistant",
            content="🎉 done",
            timestamp=T0 + timedelta(seconds=9),
            image="http://host/uploads/g.png",
            response_prompt_data="narrative",
            should_have_image=True,
        ),
    )
    return [
        ChatSession(
            id="c1",
            title="Chat 1",
            initial_image="file:///cat.jpg",
            last_generated_image="g.png",
            messages=messages,
            created_at=T0,
            updated_at=T0 + timedelta(seconds=9),
        ),
        ChatSession(id="c2", title="Chat 2", created_at=T0, updated_at=T0),
    ]


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "state" / "chat_storage.db")


def test_serialized_shape_uses_text_timestamps():
    payload = json.loads(serialize_sessions(_sessions()))

    assert payload[0]["createdAt"] == "2025-03-14T09:26:53.589793+00:00"
    assert payload[0]["messages"][0]["isImageUpload"] is True
    assert payload[0]["lastGeneratedImage"] == "g.png"
    assert "lastGeneratedImage" not in payload[1]


def test_parses_browser_style_timestamps():
    raw = json.dumps(
        [
            {
                "id": "1",
                "title": "Chat 1",
                "initialImage": "",
                "messages": [
                    {"id": "1", "chatId": "1", "role": "assistant", "content": "hi", "timestamp": "2025-03-14T09:26:53.589Z"}
                ],
                "createdAt": "2025-03-14T09:26:53.589Z",
                "updatedAt": "2025-03-14T09:26:53.589Z",
            }
        ]
    )

    (session,) = deserialize_sessions(raw)

    assert session.created_at == datetime(2025, 3, 14, 9, 26, 53, 589000, tzinfo=timezone.utc)
    assert isinstance(session.messages[0].timestamp, datetime)


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "{}",
        '[{"id": "x"}]',
        '[{"id": "x", "messages": [], "createdAt": 1e20, "updatedAt": 1e20}]',
    ],
)
def test_corrupt_documents_raise_value_error(raw):
    with pytest.raises(ValueError):
        deserialize_sessions(raw)


async def test_round_trip_through_storage(storage):
    dal = ChatSessionDAL(storage)
    original = _sessions()

    await dal.save_sessions(original)
    reloaded = await dal.load_sessions()

    assert reloaded == original
    assert [m.id for m in reloaded[0].messages] == ["m1", "m2", "m3"]
    assert reloaded[0].messages[2].timestamp == T0 + timedelta(seconds=9)


async def test_load_returns_none_when_nothing_saved(storage):
    assert await ChatSessionDAL(storage).load_sessions() is None


async def test_storage_key_value_semantics(storage):
    assert await storage.get_item("k") is None

    await storage.set_item("k", "v1")
    await storage.set_item("k", "v2")
    assert await storage.get_item("k") == "v2"


async def test_sessions_live_under_single_key(storage):
    await ChatSessionDAL(storage).save_sessions(_sessions())

    raw = await storage.get_item(STORAGE_KEY)
    assert [item["id"] for item in json.loads(raw)] == ["c1", "c2"]


async def test_storage_survives_new_instance(storage):
    await storage.set_item("k", "v")
    assert await LocalStorage(storage.db_path).get_item("k") == "v"
