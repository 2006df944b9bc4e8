# foodorder/services/chatbot_service.py
from foodorder.core.errors import ValidationError

# Keyword -> canned answer. Order matters: when several keywords appear in
# one message, the one listed last wins.
RESPONSES: dict[str, str] = {
    "menu": "You can explore our full menu in the Explore section. We have a variety of dishes.",
    "price": "Our prices range from Rs.100 to Rs.1000. You can check specific prices in the menu.",
    "delivery": "We deliver to all major areas. Typical delivery time is 30-45 minutes.",
    "payment": "We accept all major credit cards, UPI, and cash on delivery.",
    "hours": "We're open from 10 AM to 10 PM, seven days a week.",
    "default": "I'm here to help! You can ask about our menu, prices, delivery, payment options, or operating hours.",
}


class ChatbotService:
    """Keyword-matching FAQ responder."""

    def __init__(self, responses: dict[str, str] | None = None):
        self.responses = responses or RESPONSES

    def reply(self, message: str | None) -> str:
        if message is None or not message.strip():
            raise ValidationError("Message is required")

        text = message.lower()
        response = self.responses["default"]
        for keyword, answer in self.responses.items():
            if keyword in text:
                response = answer
        return response
