"""
Business assistant: intent/entity understanding and replies over an
inventory and order catalog, with a hosted model and a rule-based fallback.
"""

__version__ = "1.0.0"
