"""
Gemini client helpers shared by the landmark provider and the darkroom
"""

import logging

import google.generativeai as genai

logger = logging.getLogger(__name__)


def configured_model(credential: str, model_name: str, **model_kwargs) -> genai.GenerativeModel:
    """
    Build a GenerativeModel that will call out with credential

    genai.configure() is process-wide and drops the cached clients. A model binds
    its client on its first generate call, so callers must start that call right
    after this returns, with no await in between. Concurrent requests with
    different keys then each keep the client made for their own key.

    Args:
        credential: Gemini API key for this request
        model_name: model id, e.g. gemini-2.5-flash
        **model_kwargs: passed through to GenerativeModel

    Returns:
        Unbound GenerativeModel
    """
    genai.configure(api_key=credential)
    logger.debug(f"Gemini client configured for {model_name}")
    return genai.GenerativeModel(model_name, **model_kwargs)
