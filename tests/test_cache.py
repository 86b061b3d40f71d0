import pytest

from shadow_ssr.cache import ResourceCache
from shadow_ssr.exceptions import ResourceNotFound


def test_load_reads_file_once(tmp_path):
    path = tmp_path / "a.html"
    path.write_text("<p>one</p>", encoding="utf-8")
    cache = ResourceCache()

    assert cache.load(path) == "<p>one</p>"
    # stale-on-change: the first successful read wins
    path.write_text("<p>two</p>", encoding="utf-8")
    assert cache.load(str(path)) == "<p>one</p>"
    path.unlink()
    assert cache.load(path) == "<p>one</p>"
    assert path in cache
    assert len(cache) == 1


def test_missing_file_raises_resource_not_found(tmp_path):
    cache = ResourceCache()
    with pytest.raises(ResourceNotFound) as info:
        cache.load(tmp_path / "missing.js")
    assert isinstance(info.value, FileNotFoundError)
    assert info.value.path.name == "missing.js"
    assert len(cache) == 0


def test_directory_is_not_a_resource(tmp_path):
    with pytest.raises(ResourceNotFound):
        ResourceCache().load(tmp_path)


def test_clear_forces_reload(tmp_path):
    path = tmp_path / "a.css"
    path.write_text("a{}", encoding="utf-8")
    cache = ResourceCache()
    cache.load(path)
    path.write_text("b{}", encoding="utf-8")

    cache.clear()
    assert path not in cache
    assert cache.load(path) == "b{}"
