import openai
from typing import List, Dict, Optional
from scootsupport.core.config import settings
from scootsupport.core.exceptions import UpstreamException
import logging

logger = logging.getLogger("openai_service")

SYSTEM_PROMPT = (
    "You are a helpful customer support assistant for ScootSupport, a scooter support service.\n"
    "Be friendly, concise, and helpful. Focus on scooter-related issues, maintenance, "
    "troubleshooting, and customer service."
)

FILE_CONTEXT_TEMPLATE = "\n\nThe user has uploaded a file with the following content/context: {file_context}"

class OpenAIService:
    def __init__(self):
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY not found in environment variables")
        if not settings.openai_model:
            raise ValueError("OPENAI_MODEL not found in environment variables")

        self.client = openai.AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout_seconds
        )
        self.model = settings.openai_model
        self.system_prompt = SYSTEM_PROMPT

    def build_system_prompt(self, file_context: Optional[str] = None) -> str:
        if file_context:
            return self.system_prompt + FILE_CONTEXT_TEMPLATE.format(file_context=file_context)
        return self.system_prompt

    def build_messages(
        self,
        user_message: str,
        context: Optional[List[Dict[str, str]]] = None,
        file_context: Optional[str] = None
    ) -> List[Dict[str, str]]:
        """
        System prompt, then the tail of the conversation window, then the new message.

        `context` is the recent history as {"role", "content"} dicts, oldest
        first; only the last `chat_prompt_window` entries reach the model.
        """
        messages = [{"role": "system", "content": self.build_system_prompt(file_context)}]
        if context:
            messages.extend(context[-settings.chat_prompt_window:])
        messages.append({"role": "user", "content": user_message})
        return messages

    async def generate_response(
        self,
        user_message: str,
        context: Optional[List[Dict[str, str]]] = None,
        file_context: Optional[str] = None
    ) -> str:
        messages = self.build_messages(user_message, context, file_context)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=1000,
                temperature=0.7
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API Error: {e}")
            raise UpstreamException("OpenAI API error", details=str(e)) from e

        content = response.choices[0].message.content
        if not content:
            raise UpstreamException("OpenAI API returned an empty response")
        return content.strip()

openai_service = OpenAIService()
