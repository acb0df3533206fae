from __future__ import annotations

from .corpus import generate_corpus_files, generate_idl_sources, random_trivia

__all__ = ["generate_corpus_files", "generate_idl_sources", "random_trivia"]
