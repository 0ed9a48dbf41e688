"""Tests for the pydantic models."""

import math

import pytest
from pydantic import ValidationError as PydanticValidationError

from bolt_generator.models import (
    AXIS_DIRECTIONS,
    PLANE_NORMALS,
    BodyHandle,
    EdgeRef,
    EdgeSelection,
    EdgeType,
    LoopRef,
    Point3D,
    ThreadInfo,
    ThreadRecommendation,
    Vector3D,
    find_loop,
)


class TestPoint3D:
    """Tests for Point3D model."""

    def test_default_values(self):
        """Test Point3D defaults to origin."""
        point = Point3D()
        assert point.to_tuple() == (0.0, 0.0, 0.0)

    def test_distance_to(self):
        """Test distance between two points."""
        assert Point3D(x=0, y=0, z=0).distance_to(Point3D(x=1, y=2, z=2)) == pytest.approx(3.0)

    def test_frozen(self):
        """Test Point3D is immutable."""
        point = Point3D(x=1.0)
        with pytest.raises(PydanticValidationError):
            point.x = 2.0


class TestVector3D:
    """Tests for Vector3D model."""

    def test_magnitude(self):
        """Test magnitude is computed and serialized."""
        vector = Vector3D(x=3, y=4, z=0)
        assert vector.magnitude == pytest.approx(5.0)
        assert vector.model_dump()["magnitude"] == pytest.approx(5.0)

    def test_plane_normals_and_axes_are_unit(self):
        """Test construction plane normals and axes are unit vectors."""
        for vector in list(PLANE_NORMALS.values()) + list(AXIS_DIRECTIONS.values()):
            assert math.isclose(vector.magnitude, 1.0)

    def test_axis_lookup_by_value(self):
        """Test axis directions compare by value."""
        assert AXIS_DIRECTIONS["Z"] == Vector3D(x=0, y=0, z=1)
        assert AXIS_DIRECTIONS["X"] != AXIS_DIRECTIONS["Z"]


class TestLoops:
    """Tests for loop and edge selection models."""

    def _loop(self, *ids, is_outer=True):
        return LoopRef(
            edges=tuple(EdgeRef(id=edge_id, edge_type=EdgeType.LINE) for edge_id in ids),
            is_outer=is_outer,
        )

    def test_edge_count(self):
        """Test edge_count follows the edge tuple."""
        assert self._loop("edge_001", "edge_002").edge_count == 2
        assert LoopRef().edge_count == 0

    def test_find_loop_first_match(self):
        """Test find_loop returns the first matching loop."""
        loops = [self._loop("edge_001", "edge_002"), self._loop("edge_003", is_outer=False)]
        found = find_loop(loops, lambda loop: loop.edge_count == 1)
        assert found is loops[1]

    def test_find_loop_no_match(self):
        """Test find_loop returns None when nothing matches."""
        assert find_loop([self._loop("edge_001", "edge_002")], lambda loop: loop.edge_count == 1) is None

    def test_selection_from_loops(self):
        """Test an edge selection keeps loop order."""
        selection = EdgeSelection.from_loops([self._loop("edge_001", "edge_002"), self._loop("edge_003")])
        assert selection.ids == ["edge_001", "edge_002", "edge_003"]
        assert len(selection) == 3


class TestThreadModels:
    """Tests for thread models."""

    def test_info_from_recommendation(self):
        """Test ThreadInfo copies the recommendation and defaults to external."""
        recommendation = ThreadRecommendation(
            thread_type="ISO Metric profile",
            designation="M5x0.8",
            thread_class="6g",
        )
        info = ThreadInfo.from_recommendation(recommendation)
        assert info.is_internal is False
        assert info.designation == "M5x0.8"
        assert info.thread_class == "6g"

    def test_info_requires_designation(self):
        """Test ThreadInfo rejects a missing designation."""
        with pytest.raises(PydanticValidationError):
            ThreadInfo(thread_type="ISO Metric profile", thread_class="6g")


class TestBodyHandle:
    """Tests for BodyHandle model."""

    def test_counts_default_to_zero(self):
        """Test face and edge counts default to zero."""
        handle = BodyHandle(id="body_001", name="Bolt", component_id="component_001")
        assert handle.faces_count == 0
        assert handle.edges_count == 0
