"""Domain layer — link grammar, path rules, and rewriting.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
