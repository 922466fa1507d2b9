"""Errors raised by LLM providers.

Callers can tell a failed request apart from a successful response that did
not have the expected shape; both abort a send the same way.
"""


class LLMError(Exception):
    """Base class for completion failures."""


class LLMRequestError(LLMError):
    """The request failed: network error, timeout, auth or non-success status."""


class LLMResponseFormatError(LLMError):
    """The request succeeded but the response lacked the expected text field."""
