# -*- coding: utf-8 -*-
"""
Advice Module

External financial advice provider used by the chat orchestrator.
"""

from .client import AdviceClient, AdviceContext, AdviceServiceError

__all__ = [
    "AdviceClient",
    "AdviceContext",
    "AdviceServiceError",
]
