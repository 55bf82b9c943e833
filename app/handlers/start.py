from aiogram import Router, F
from aiogram.types import Message
from app.chat.assistant import ChatAssistant
from app.models.dto import Intent
from loguru import logger

router = Router()


@router.message(F.text == "/start")
async def cmd_start(message: Message, assistant: ChatAssistant):
    """
    /start handler - drops any previous history and greets.
    """
    session_id = str(message.chat.id)
    assistant.reset(session_id)
    logger.info(f"Chat {session_id} started conversation")

    await message.answer(assistant.formatter.pick_template(Intent.GREETING))


@router.message(F.text == "/reset")
async def cmd_reset(message: Message, assistant: ChatAssistant):
    """
    /reset handler - clears conversation history and context.
    """
    session_id = str(message.chat.id)
    if assistant.reset(session_id):
        await message.answer("Conversation cleared. How can I help you?")
    else:
        await message.answer("Nothing to clear yet. How can I help you?")
