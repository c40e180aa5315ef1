"""Build chat request payloads from Markdown records."""

import json

from mdprompt.errors import TransformError
from mdprompt.models import ChatMessage, ChatOptions, ChatRequest, Record


class ChatRequestTransformer:
    """Wraps a document into a fixed single-turn chat request.

    The document is embedded verbatim between a fixed opening and closing
    phrase, after a short system instruction. Output is deterministic: the
    same record always serializes to the same bytes.
    """

    DEFAULT_MODEL = "gemma3:1b"
    DEFAULT_SYSTEM_PROMPT = "Ты — помощник для анализа текстов. Отвечай кратко и по делу."
    TEXT_PREFIX = "Начало текста: "
    TEXT_SUFFIX = "\n\nКонец текста."
    DEFAULT_TEMPERATURE = 0.3
    DEFAULT_NUM_CTX = 2048

    def __init__(
        self,
        model: str | None = None,
        system_prompt: str | None = None,
        temperature: float | None = None,
        num_ctx: int | None = None,
    ):
        self.model = self.DEFAULT_MODEL if model is None else model
        self.system_prompt = self.DEFAULT_SYSTEM_PROMPT if system_prompt is None else system_prompt
        self.temperature = self.DEFAULT_TEMPERATURE if temperature is None else temperature
        self.num_ctx = self.DEFAULT_NUM_CTX if num_ctx is None else num_ctx

    def user_message(self, content: str) -> str:
        return f"{self.TEXT_PREFIX}{content}{self.TEXT_SUFFIX}"

    def build(self, record: Record) -> ChatRequest:
        """Build the request object for a record."""
        return ChatRequest(
            model=self.model,
            messages=[
                ChatMessage(role="system", content=self.system_prompt),
                ChatMessage(role="user", content=self.user_message(record.content)),
            ],
            options=ChatOptions(temperature=self.temperature, num_ctx=self.num_ctx),
            stream=False,
        )

    def transform(self, record: Record) -> str:
        """Serialize the request for a record as indented JSON.

        Raises:
            TransformError: If the request cannot be serialized
        """
        try:
            return json.dumps(
                self.build(record).to_dict(),
                indent=2,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise TransformError(record.name, str(e)) from e
