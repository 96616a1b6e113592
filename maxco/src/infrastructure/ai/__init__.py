"""
AI Service Infrastructure for MAXCO.

Provides Gemini API integration for the AI-backed panels.
"""

from .ai_service import AIService, AIConfig, AIRequest, AIServiceError, AIConfigurationError
from .api_client import GeminiClient

__all__ = [
    'AIService',
    'AIConfig',
    'AIRequest',
    'AIServiceError',
    'AIConfigurationError',
    'GeminiClient'
]
