from rfp_analyzer.llm.chat import ChatAssistant, ChatTurn
from rfp_analyzer.llm.factory import LlmGatewayFactory
from rfp_analyzer.llm.gateway import LlmGateway
from rfp_analyzer.llm.models import Failed, LlmResult, Raw, Structured

__all__ = [
    "ChatAssistant",
    "ChatTurn",
    "Failed",
    "LlmGateway",
    "LlmGatewayFactory",
    "LlmResult",
    "Raw",
    "Structured",
]
