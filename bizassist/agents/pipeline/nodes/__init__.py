"""
Pipeline workflow nodes
"""

from bizassist.agents.pipeline.nodes.understand import understand_node, understand_fallback_node
from bizassist.agents.pipeline.nodes.load_context import load_context_node
from bizassist.agents.pipeline.nodes.respond import respond_node, respond_fallback_node
from bizassist.agents.pipeline.nodes.persist import persist_node

__all__ = [
    "understand_node",
    "understand_fallback_node",
    "load_context_node",
    "respond_node",
    "respond_fallback_node",
    "persist_node",
]
