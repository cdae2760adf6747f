"""Prompt templates for LLM interactions.

Each module contains system/user prompt pairs and builder functions for a
specific domain.

Modules:
    generation: Wizard suggestions, personal statement, career profile,
        path details, and learning plans
"""
