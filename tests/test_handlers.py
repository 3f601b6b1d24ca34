import pytest

from contactbot import content
from contactbot.errors import TelegramAPIError
from contactbot.handlers import BotHandlers
from contactbot.lifecycle import ActionLifecycleController
from contactbot.pending_store import PendingActionStore
from contactbot.schemas import Update

ADMIN = 999
CHAT = 42


@pytest.fixture
def handlers(fake_telegram, clock):
    ctl = ActionLifecycleController(PendingActionStore(clock=clock))
    return BotHandlers(fake_telegram, ctl, ADMIN)


def _message(text=None, contact=None, message_id=7):
    msg = {"message_id": message_id, "chat": {"id": CHAT}}
    if text is not None:
        msg["text"] = text
    if contact is not None:
        msg["contact"] = contact
    return Update.model_validate({"update_id": 1, "message": msg})


def _callback(data, with_message=True):
    cb = {"id": "cb-1", "data": data}
    if with_message:
        cb["message"] = {"message_id": 3, "chat": {"id": CHAT}}
    return Update.model_validate({"update_id": 2, "callback_query": cb})


async def test_start_sends_welcome_with_main_menu(handlers, fake_telegram):
    await handlers.handle_update(_message("/start"))

    assert fake_telegram.sent == [
        {"chat_id": CHAT, "text": content.WELCOME_TEXT, "reply_markup": content.main_menu()}
    ]


async def test_contact_command_marks_pending(handlers, fake_telegram):
    await handlers.handle_update(_message("/contact"))

    assert await handlers.controller.is_pending(CHAT)
    sent = fake_telegram.sent[-1]
    assert sent["text"] == content.CONTACT_PROMPT
    assert sent["reply_markup"]["keyboard"][0][0]["request_contact"] is True


async def test_shared_contact_cancels_and_forwards(handlers, fake_telegram):
    await handlers.handle_update(_message("/contact"))
    await handlers.handle_update(
        _message(contact={"phone_number": "+10000000000", "first_name": "Sam"}, message_id=11)
    )

    assert not await handlers.controller.is_pending(CHAT)
    assert fake_telegram.forwarded == [
        {"chat_id": ADMIN, "from_chat_id": CHAT, "message_id": 11}
    ]
    assert fake_telegram.sent[-1]["text"] == content.CONTACT_THANKS
    assert fake_telegram.sent[-1]["reply_markup"] == {"remove_keyboard": True}


async def test_unsolicited_contact_is_fine(handlers, fake_telegram):
    await handlers.handle_update(_message(contact={"phone_number": "+1"}))

    assert fake_telegram.forwarded
    assert await handlers.controller.pending_count() == 0


async def test_unknown_text_is_ignored(handlers, fake_telegram):
    await handlers.handle_update(_message("hello"))
    assert fake_telegram.sent == []


@pytest.mark.parametrize(
    "data,expected_text",
    [
        ("start", content.WELCOME_TEXT),
        ("back", content.WELCOME_TEXT),
        ("about", content.ABOUT_TEXT),
        ("faq", content.FAQ_TITLE),
        ("faq_3", content.FAQ["faq_3"][1]),
    ],
)
async def test_callbacks_render_and_acknowledge(handlers, fake_telegram, data, expected_text):
    await handlers.handle_update(_callback(data))

    assert fake_telegram.texts_to(CHAT) == [expected_text]
    assert fake_telegram.answered == ["cb-1"]


async def test_leave_contact_callback_starts_pending(handlers, fake_telegram):
    await handlers.handle_update(_callback("leave_contact"))

    assert await handlers.controller.is_pending(CHAT)
    assert fake_telegram.texts_to(CHAT) == [content.CONTACT_PROMPT]


async def test_unknown_callback_still_acknowledged(handlers, fake_telegram):
    await handlers.handle_update(_callback("nope"))

    assert fake_telegram.sent == []
    assert fake_telegram.answered == ["cb-1"]


async def test_callback_without_message_only_acknowledged(handlers, fake_telegram):
    await handlers.handle_update(_callback("start", with_message=False))

    assert fake_telegram.sent == []
    assert fake_telegram.answered == ["cb-1"]


async def test_callback_acknowledged_when_send_fails(handlers, fake_telegram):
    fake_telegram.fail_for.add(CHAT)

    with pytest.raises(TelegramAPIError):
        await handlers.handle_update(_callback("about"))

    assert fake_telegram.sent == []
    assert fake_telegram.answered == ["cb-1"]


async def test_contact_thanks_sent_when_forward_fails(handlers, fake_telegram):
    fake_telegram.fail_for.add(ADMIN)
    await handlers.handle_update(_message("/contact"))

    await handlers.handle_update(_message(contact={"phone_number": "+1"}, message_id=11))

    assert fake_telegram.forwarded == []
    assert not await handlers.controller.is_pending(CHAT)
    assert fake_telegram.texts_to(CHAT)[-1] == content.CONTACT_THANKS


def test_faq_menu_lists_every_answer():
    rows = content.faq_menu()["inline_keyboard"]
    data = [row[0]["callback_data"] for row in rows]
    assert data == ["faq_1", "faq_2", "faq_3", "faq_4", "faq_5", "back"]
