from .extractor import extract_output_content
from .history import ResponseHistory
from .invoker import WebhookInvoker
from .models import WebhookResponse, WebhookTarget

__all__ = [
    "extract_output_content",
    "ResponseHistory",
    "WebhookInvoker",
    "WebhookResponse",
    "WebhookTarget",
]
