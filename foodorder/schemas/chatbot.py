# foodorder/schemas/chatbot.py
from pydantic import BaseModel


class ChatRequest(BaseModel):
    message: str | None = None


class ChatResponse(BaseModel):
    success: bool = True
    response: str
