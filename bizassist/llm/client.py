"""
LLM client factory

Creates appropriate LLM instances based on provider configuration.
"""

from typing import Optional

from loguru import logger

from bizassist.config.settings import settings


def log_provider_status() -> None:
    """Log which hosted provider is configured (called once at startup)."""
    if not settings.hosted_model_enabled:
        logger.info("Hosted model disabled - every message uses the rule-based pipeline")
    elif settings.llm_provider == "openai":
        if settings.openai_api_key:
            key = settings.openai_api_key
            masked_key = key[:8] + "..." + key[-4:] if len(key) > 12 else "***"
            logger.info(f"✅ LLM Provider: OpenAI | Model: {settings.openai_model} | API key loaded: {masked_key}")
        else:
            logger.warning("⚠️  LLM Provider: OpenAI but OPENAI_API_KEY not set - rule-based fallback will answer")
    elif settings.llm_provider == "ollama":
        logger.info(f"✅ LLM Provider: Ollama | Base URL: {settings.ollama_base_url} | Model: {settings.ollama_model}")
    else:
        logger.warning(f"⚠️  Unknown LLM provider: {settings.llm_provider}. Supported: 'openai', 'ollama'")


def create_llm(
    temperature: Optional[float] = None,
    max_completion_tokens: Optional[int] = None,
    model: Optional[str] = None,
    timeout: Optional[float] = None,
):
    """
    Factory function to create appropriate LLM based on provider configuration.

    Args:
        temperature: Generation temperature (defaults to provider-specific default)
        max_completion_tokens: Max tokens for completion (defaults to settings.max_output_tokens)
        model: Model name (defaults to provider-specific model)
        timeout: Per-request timeout in seconds (defaults to settings.llm_timeout_seconds)

    Returns:
        LangChain ChatModel instance (ChatOpenAI or ChatOllama)
    """
    provider = settings.llm_provider.lower()
    max_tokens = max_completion_tokens or settings.max_output_tokens
    request_timeout = timeout if timeout is not None else settings.llm_timeout_seconds

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required when LLM_PROVIDER=openai")

        return ChatOpenAI(
            model=model or settings.openai_model,
            api_key=settings.openai_api_key,
            temperature=temperature if temperature is not None else settings.openai_temperature,
            max_completion_tokens=max_tokens,
            timeout=request_timeout,
            max_retries=settings.llm_max_retries,
        )

    elif provider == "ollama":
        from langchain_community.chat_models import ChatOllama

        return ChatOllama(
            model=model or settings.ollama_model,
            base_url=settings.ollama_base_url,
            temperature=temperature if temperature is not None else settings.openai_temperature,
            num_predict=max_tokens,  # Ollama uses num_predict instead of max_completion_tokens
            timeout=int(request_timeout),
        )

    else:
        raise ValueError(f"Unsupported LLM provider: {provider}. Supported: 'openai', 'ollama'")


def create_hosted_llm():
    """
    Build the chat model used by the hosted path, or None when it is unavailable.

    A missing key or unknown provider is not fatal: the pipeline answers every
    message through the rule-based path instead.
    """
    if not settings.hosted_model_enabled:
        return None
    try:
        return create_llm()
    except (ValueError, ImportError) as e:
        logger.warning(f"Hosted model unavailable, using rule-based pipeline only: {e}")
        return None
