from .anthropic import AnthropicAdapter
from .base import BaseChatAdapter
from .openai_style import OpenAIStyleAdapter

__all__ = ["AnthropicAdapter", "BaseChatAdapter", "OpenAIStyleAdapter"]
