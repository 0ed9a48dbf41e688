"""Unit tests for the handle registry."""

from bolt_generator.kernel import HandleRegistry


class TestHandleRegistry:
    """Tests for HandleRegistry."""

    def test_register_returns_sequential_ids(self):
        """Test IDs are numbered per kind."""
        registry = HandleRegistry()
        assert registry.register("body", object()) == "body_001"
        assert registry.register("body", object()) == "body_002"
        assert registry.register("face", object()) == "face_001"

    def test_register_same_object_twice(self):
        """Test re-registering returns the existing ID."""
        registry = HandleRegistry()
        entity = object()
        assert registry.register("edge", entity) == registry.register("edge", entity)
        assert registry.ids("edge") == ["edge_001"]

    def test_get(self):
        """Test lookup by kind and ID."""
        registry = HandleRegistry()
        entity = object()
        entity_id = registry.register("sketch", entity)
        assert registry.get("sketch", entity_id) is entity
        assert registry.get("body", entity_id) is None
        assert registry.get("sketch", "sketch_999") is None

    def test_clear(self):
        """Test clearing drops entities and restarts numbering."""
        registry = HandleRegistry()
        registry.register("body", object())
        registry.clear()
        assert registry.ids("body") == []
        assert registry.register("body", object()) == "body_001"
