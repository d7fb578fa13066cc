"""Pattern memory for DashGen."""

from dashgen.memory.pattern_store import PatternStore, InMemoryPatternStore, SqlPatternStore
from dashgen.memory.pattern_memory import PatternMemory, MemoryContext, create_memory_context

__all__ = [
    "PatternStore",
    "InMemoryPatternStore",
    "SqlPatternStore",
    "PatternMemory",
    "MemoryContext",
    "create_memory_context",
]
