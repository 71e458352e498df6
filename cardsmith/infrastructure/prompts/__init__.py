"""Prompts versionados (policy + templates por capability)."""

from .loader import PromptLoader, PromptMetadata, get_prompt_loader, parse_frontmatter

__all__ = ["PromptLoader", "PromptMetadata", "get_prompt_loader", "parse_frontmatter"]
