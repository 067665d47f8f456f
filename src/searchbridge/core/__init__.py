"""Orchestration layer — Index builds, searches and result normalization."""

from searchbridge.core.defaults import DefaultsStore, engine_defaults
from searchbridge.core.indexer import IndexOrchestrator
from searchbridge.core.manager import SearchBridge, configure
from searchbridge.core.normalizer import ResultNormalizer, normalize_hit, normalize_snippet
from searchbridge.core.searcher import SearchOrchestrator

__all__ = [
    "DefaultsStore",
    "IndexOrchestrator",
    "ResultNormalizer",
    "SearchBridge",
    "SearchOrchestrator",
    "configure",
    "engine_defaults",
    "normalize_hit",
    "normalize_snippet",
]
