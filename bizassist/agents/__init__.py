"""
Agents package
"""

from bizassist.agents.pipeline import ChatPipeline, ChatResult

__all__ = ["ChatPipeline", "ChatResult"]
