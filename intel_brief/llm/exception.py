"""
Custom exceptions for the LLM module.
"""
from typing import Optional


class LLMError(Exception):
    """Base exception class for LLM-related errors."""
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self):
        if self.status_code:
            return f"[Code: {self.status_code}] {self.message}"
        return self.message


class MissingCredentialError(LLMError):
    """The selected provider has no API key configured."""
    def __init__(self, provider: str):
        super().__init__(f"Missing API Key for {provider}")
        self.provider = provider


class ProviderHTTPError(LLMError):
    """Non-2xx response from an HTTP provider. Carries the raw body."""
    def __init__(self, status_code: int, body: str):
        super().__init__(f"API Error {status_code}: {body}", status_code=status_code)
        self.body = body


class ProviderError(LLMError):
    """Transport or SDK failure while calling a provider."""


class ResponseParseError(LLMError):
    """Provider answered, but the text is not usable JSON."""
    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class BriefingInProgressError(LLMError):
    """A briefing was requested while another one is still running."""
