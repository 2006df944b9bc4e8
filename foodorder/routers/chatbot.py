# foodorder/routers/chatbot.py
from fastapi import APIRouter

from foodorder.schemas.chatbot import ChatRequest, ChatResponse
from foodorder.services.chatbot_service import ChatbotService

router = APIRouter(prefix="/chatbot", tags=["Chatbot"])

service = ChatbotService()


@router.post("", response_model=ChatResponse)
def handle_message(payload: ChatRequest):
    """
    Answer a customer question by keyword (menu, price, delivery,
    payment, hours). Open to guests.
    """
    return ChatResponse(response=service.reply(payload.message))
