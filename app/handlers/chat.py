from aiogram import Router, F
from aiogram.types import Message
from app.chat.assistant import ChatAssistant
from loguru import logger

router = Router()


@router.message(F.text)
async def handle_chat_message(message: Message, assistant: ChatAssistant):
    """
    Any free text goes through the assistant; the chat id is the session id.
    """
    session_id = str(message.chat.id)
    logger.info(f"Message from {session_id}: {(message.text or '')[:100]}")

    reply = await assistant.handle(message.text or "", session_id)
    await message.answer(reply)
