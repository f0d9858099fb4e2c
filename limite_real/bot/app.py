"""Messaging-channel webhook: forwards chat messages to the interpreter"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field

from limite_real.bot import messages
from limite_real.bot.interpreter import ChatInterpreter
from limite_real.infrastructure.clients.cache import LocalProfileCache
from limite_real.infrastructure.clients.gateway import GatewayClient
from limite_real.infrastructure.clients.tiered import TieredLimitClient
from limite_real.infrastructure.observability.logging import setup_logging
from limite_real.config import settings

setup_logging(settings.log_level)


class IncomingMessage(BaseModel):
    """Message delivered by the messaging channel"""

    sender: str = Field(..., min_length=1, description="Sender identity, e.g. phone number")
    text: str = ""
    from_me: bool = False
    is_group: bool = False


class OutgoingReply(BaseModel):
    reply: Optional[str] = None


@lru_cache
def get_interpreter() -> ChatInterpreter:
    """Single interpreter so setup sessions survive across requests"""
    client = TieredLimitClient(remote=GatewayClient(), cache=LocalProfileCache())
    return ChatInterpreter(client)


def create_app() -> FastAPI:
    app = FastAPI(title="Límite Real Chat Bot", version="0.1.0")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/webhook", response_model=OutgoingReply)
    async def receive_message(
        message: IncomingMessage,
        interpreter: ChatInterpreter = Depends(get_interpreter),
    ):
        # Own messages, group chats and empty bodies never get a reply
        if message.from_me or message.is_group or not message.text.strip():
            return OutgoingReply()

        logging.info("Message received", extra={"sender": message.sender})
        try:
            reply = await interpreter.handle(message.sender, message.text)
        except Exception as e:
            logging.error(f"Error processing message: {e}", extra={"sender": message.sender})
            reply = messages.UNEXPECTED_ERROR

        return OutgoingReply(reply=reply)

    return app


app = create_app()
