"""
Command interpreter: turns a merchant's free-text command into a structured update.

Sends the product titles and the command to the completion model, expects a
JSON object back, and validates its shape before anything downstream uses it.
"""

import json
import re
from typing import Optional
import anthropic
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings
from models.command import InterpretationResult
from models.product import Product
from exceptions import (
    ConfigurationError,
    ExternalServiceError,
    MalformedModelResponseError,
    InterpretationSchemaError,
)

logger = structlog.get_logger(__name__)


class CommandInterpreterService:
    """
    Interpret merchant commands with the Anthropic Messages API.

    The client is injected; when omitted one is built from settings on
    first use.
    """

    SYSTEM_PROMPT = """You are a helpful assistant that interprets commands to update product titles and generate SEO-friendly descriptions.

Given a list of products and a command, identify the product being referred to and suggest a new title and SEO-based description based on the command.

IMPORTANT: Return ONLY valid JSON, no markdown, no explanation, no code blocks.

Return a JSON object with exactly these keys:
- productTitle: the current title of the product to be updated, copied exactly from the product list
- newTitle: the suggested new title
- newDescription: the SEO-friendly product description (HTML allowed)

Example:
{"productTitle": "Snowboard", "newTitle": "Extreme Winter Glider", "newDescription": "<p>Carve fresh powder...</p>"}"""

    def __init__(
        self,
        client: Optional[anthropic.Anthropic] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None
    ):
        self._client = client
        self.model = model or settings.llm_model
        self.max_tokens = max_tokens or settings.llm_max_tokens

    @property
    def client(self) -> anthropic.Anthropic:
        if self._client is None:
            if not settings.anthropic_api_key:
                raise ConfigurationError(
                    "anthropic_api_key",
                    "Completion model not available. Set ANTHROPIC_API_KEY environment variable."
                )
            self._client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
        return self._client

    @staticmethod
    def build_user_message(command: str, products: list[Product]) -> str:
        """Only titles leave the server; ids and descriptions stay local."""
        titles = [p.title for p in products]
        return f"Products: {json.dumps(titles, ensure_ascii=False)}\n\nCommand: {command}"

    def interpret(self, command: str, products: list[Product]) -> InterpretationResult:
        """
        Ask the model which product to change and how.

        Args:
            command: Merchant instruction
            products: Snapshot the command refers to

        Returns:
            Validated InterpretationResult

        Raises:
            ExternalServiceError: Provider call failed
            MalformedModelResponseError: Reply is not JSON
            InterpretationSchemaError: Reply is JSON of the wrong shape
        """
        logger.info(
            "interpreting_command",
            command_length=len(command),
            product_count=len(products),
            model=self.model
        )

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=self.SYSTEM_PROMPT,
                messages=[{
                    "role": "user",
                    "content": self.build_user_message(command, products)
                }]
            )
        except anthropic.APIError as e:
            logger.error("llm_api_error", error=str(e), error_type=type(e).__name__)
            raise ExternalServiceError("llm", f"Completion model error: {str(e)}") from e

        response_text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        logger.debug("llm_response_received", response_length=len(response_text))

        return self.parse_response(response_text)

    def parse_response(self, response_text: str) -> InterpretationResult:
        """
        Parse and validate the model's reply.

        Args:
            response_text: Raw reply text

        Returns:
            InterpretationResult
        """
        # Unwrap ```json fences if the model added them anyway
        cleaned = response_text.strip()
        if cleaned.startswith("```"):
            cleaned = re.sub(r'^```(?:json)?\s*', '', cleaned)
            cleaned = re.sub(r'\s*```$', '', cleaned)

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error("llm_json_parse_failed", response_preview=response_text[:500], error=str(e))
            raise MalformedModelResponseError(response_text) from e

        if not isinstance(data, dict):
            raise InterpretationSchemaError(
                [{"loc": [], "type": "dict_type", "msg": "Expected a JSON object"}],
                response_text
            )

        try:
            result = InterpretationResult.model_validate(data)
        except PydanticValidationError as e:
            errors = [
                {"loc": list(err["loc"]), "type": err["type"], "msg": err["msg"]}
                for err in e.errors()
            ]
            logger.error("llm_response_invalid_shape", errors=errors)
            raise InterpretationSchemaError(errors, response_text) from e

        logger.info(
            "command_interpreted",
            product_title=result.product_title,
            new_title=result.new_title
        )
        return result


# Singleton instance
_interpreter: Optional[CommandInterpreterService] = None


def get_command_interpreter_service() -> CommandInterpreterService:
    """Get or create CommandInterpreterService instance."""
    global _interpreter
    if _interpreter is None:
        _interpreter = CommandInterpreterService()
    return _interpreter
