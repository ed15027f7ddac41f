from .memory import Memory, MemoryCell
