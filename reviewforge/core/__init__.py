"""
Core Infrastructure for ReviewForge.

This module forms the innermost layer of ReviewForge, providing the
foundational services the other packages depend on.

Architecture Position
---------------------
    CLI (outermost)
      └── Service (fetch state -> engine -> write back)
            └── Engine, Storage
                  └── **Core** (innermost - you are here)

Components
----------
**Configuration (config/, config_loaders.py)**
    Nested dataclasses with YAML persistence and environment overrides.

**Logging (logging.py)**
    Structured logging with context binding.

**Exceptions (exceptions.py)**
    ReviewForgeError hierarchy with helpful error metadata.

**Cache (cache.py)**
    Explicit cache collaborator injected into callers.

**Env (env.py)**
    Bounded, whitelisted environment variable getters.
"""
