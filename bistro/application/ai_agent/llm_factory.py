from langchain_core.language_models.chat_models import BaseChatModel
from bistro.core.config import settings

class LLMFactory:
    @staticmethod
    def create_llm(provider: str = None, model: str = None, temperature: float = 0.0) -> BaseChatModel:
        """
        Builds the chat model used for slot extraction.

        Retries are disabled: a failed extraction fails the turn.
        """
        provider = provider or settings.DEFAULT_LLM_PROVIDER
        model = model or settings.DEFAULT_LLM_MODEL
        timeout = settings.EXTRACTION_TIMEOUT_SECONDS
        
        if provider == "openai":
            from langchain_openai import ChatOpenAI
            return ChatOpenAI(
                model=model,
                temperature=temperature,
                api_key=settings.OPENAI_API_KEY,
                timeout=timeout,
                max_retries=0
            )
        
        elif provider == "anthropic":
            from langchain_anthropic import ChatAnthropic
            return ChatAnthropic(
                model=model,
                temperature=temperature,
                api_key=settings.ANTHROPIC_API_KEY,
                timeout=timeout,
                max_retries=0
            )
        
        elif provider == "groq":
            from langchain_groq import ChatGroq
            return ChatGroq(
                model=model, # e.g. llama-3.3-70b-versatile
                temperature=temperature,
                api_key=settings.GROQ_API_KEY,
                timeout=timeout,
                max_retries=0
            )
            
        else:
            raise ValueError(f"Unsupported LLM provider: {provider}")
