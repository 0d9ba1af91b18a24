from __future__ import annotations

from typing import Optional


class KnowledgeBaseError(Exception):
    """Base class for knowledge base failures."""


class SourceMalformed(KnowledgeBaseError):
    """A source table could not be parsed. Fatal during initialization."""

    def __init__(self, source: str, detail: str, row: Optional[int] = None):
        self.source = source
        self.detail = detail
        self.row = row
        where = f"{source} (row {row})" if row is not None else source
        super().__init__(f"Malformed source {where}: {detail}")


class StartupTimeout(KnowledgeBaseError):
    """Initialization did not finish within the configured time."""


class CharacterNotFound(KnowledgeBaseError, LookupError):
    def __init__(self, character: str):
        self.character = character
        super().__init__(f"character not found: {character}")
