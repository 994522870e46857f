# simsearch/logging/tags.py
"""
Logging subsystem tags.

Every log line starts with one of these so output stays greppable.
"""

ADAPTER = "[ADAPTER]"
RESOLVER = "[RESOLVER]"
EXECUTOR = "[EXECUTOR]"
PROJECTOR = "[PROJECTOR]"
VECTOR_DB = "[VECTOR_DB]"
VECTOR_SEARCH = "[VECTOR_SEARCH]"
EMBEDDING = "[EMBEDDING]"
CREDENTIALS = "[CREDENTIALS]"
NODE = "[NODE]"
REGISTRY = "[REGISTRY]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
