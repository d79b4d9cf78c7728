"""Entity name resolution backed by LLM completions and Gemini context caches.

Import from the submodules (``src.resolution.bootstrap``,
``src.resolution.entity_resolver``, ...) directly.
"""
