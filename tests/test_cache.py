from __future__ import annotations

from epubpage.cache import GenerationCache


def test_cache_starts_dirty() -> None:
    cache: GenerationCache[str] = GenerationCache()

    assert cache.dirty
    assert cache.value is None


def test_store_then_invalidate() -> None:
    cache: GenerationCache[str] = GenerationCache()

    assert cache.store("tree") == "tree"
    assert not cache.dirty
    assert cache.value == "tree"

    cache.invalidate()
    assert cache.dirty
    assert cache.value is None
