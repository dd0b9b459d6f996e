"""Infrastructure layer — filesystem, frontmatter, vault file index.

This layer depends on stdlib, third-party libs (ruamel.yaml), and the
domain layer's plain types. It must never import from services,
commands, or output.
"""
