"""LLM clients: Google Gemini, Azure OpenAI and OpenAI behind one text-in/text-out call."""

from abc import ABC, abstractmethod
from typing import Optional

from google import genai
from google.genai import types
from openai import AzureOpenAI, OpenAI


class BaseLLMClient(ABC):
    """One prompt in, the model's raw reply text out."""

    @abstractmethod
    def generate_text(
        self,
        model: str,
        prompt: str,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Send a single prompt and return the raw text of the model's reply.

        Raises whatever the provider SDK raises on network or HTTP failures.
        """
        pass


class GeminiLLMClient(BaseLLMClient):
    """Google Gemini through the google-genai SDK."""

    def __init__(self, api_key: str):
        self.client = genai.Client(api_key=api_key)

    def generate_text(self, model, prompt, temperature=0.0, max_tokens=None) -> str:
        response = self.client.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
        )
        return response.text or ""


class ChatCompletionsClient(BaseLLMClient):
    """Shared single-message chat completion call for the openai SDK clients."""

    client: OpenAI

    def generate_text(self, model, prompt, temperature=0.0, max_tokens=None) -> str:
        completion = self.client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return completion.choices[0].message.content or ""


class AzureLLMClient(ChatCompletionsClient):
    """Azure OpenAI deployment; model is the deployment name."""

    def __init__(self, azure_endpoint: str, api_key: str, api_version: str):
        self.client = AzureOpenAI(
            azure_endpoint=azure_endpoint,
            api_key=api_key,
            api_version=api_version,
        )


class OpenAIClient(ChatCompletionsClient):
    """OpenAI API directly."""

    def __init__(self, api_key: str):
        self.client = OpenAI(api_key=api_key)
