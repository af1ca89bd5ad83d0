# -*- coding: utf-8 -*-
"""Test suite for the RasterRegions workflow.

This suite runs labeling through layers: building the region-id raster and region objects, selecting regions by
area and value, attaching statistics, and summarizing the layers held by a LayerManager.
"""

import numpy as np
import pytest

from rasterregions import (
    ConnectedComponentsLabeling,
    Layer,
    LayerManager,
    attach_area_stats,
    attach_count,
    attach_shape_metrics,
    attach_value_distribution,
    calculate_statistics_summary,
    create_sample_data,
    select_by_area,
    select_by_value,
)


@pytest.fixture
def sample_grid():
    """Fixture providing the 20x10 sample grid."""
    return create_sample_data()


@pytest.fixture
def small_layer():
    """Fixture with a labeled 3x3 grid holding two horizontal pairs."""
    values = [1, 1, 0, 0, 0, 0, 0, 2, 2]
    return ConnectedComponentsLabeling(connectivity="four-way").execute(values, 3, 3)


def test_labeling_layer(small_layer):
    """Segment ids follow bounding box origin order and are painted into the raster."""
    assert small_layer.type == "labeling"
    assert small_layer.metadata["num_regions"] == 2
    assert small_layer.metadata["connectivity"] == "four-way"

    expected_raster = np.array([[1, 1, 0], [0, 0, 0], [0, 2, 2]])
    assert np.array_equal(small_layer.raster, expected_raster)

    objects = small_layer.objects
    assert list(objects["segment_id"]) == [1, 2]
    assert list(objects["value"]) == [1, 2]
    assert list(objects["area_pixels"]) == [2, 2]
    assert list(objects["bbox_width"]) == [2, 2]
    assert list(objects["bbox_height"]) == [1, 1]
    assert objects.geometry.iloc[1].bounds == (1.0, 2.0, 3.0, 3.0)

    region = small_layer.region(2)
    assert region.points == frozenset({(1, 2), (2, 2)})

    with pytest.raises(ValueError):
        small_layer.region(3)


def test_labeling_with_transform():
    """An affine transform maps box geometries and scales the area."""
    affine = pytest.importorskip("affine")
    transform = affine.Affine(10.0, 0.0, 100.0, 0.0, -10.0, 200.0)

    layer = ConnectedComponentsLabeling().execute([1, 1, 0, 0], 2, 2, transform=transform, crs="EPSG:3857")

    assert layer.objects.crs is not None
    assert layer.objects.geometry.iloc[0].bounds == pytest.approx((100.0, 190.0, 120.0, 200.0))
    assert layer.objects["area_units"].iloc[0] == pytest.approx(200.0)


def test_min_size_drops_regions(sample_grid):
    values, width, height = sample_grid
    layer = ConnectedComponentsLabeling(min_size=2).execute(values, width, height)

    assert layer.metadata["num_regions"] == 4
    assert layer.metadata["num_regions_dropped"] == 3
    assert set(layer.objects["value"]) == {1, 3, 5, 6}
    # single pixel regions are background in the raster
    assert layer.raster[0, 5] == 0
    assert layer.raster[6, 10] == 0


def test_empty_grid_layer():
    layer = ConnectedComponentsLabeling().execute([0] * 12, 4, 3)

    assert layer.raster.shape == (3, 4)
    assert not layer.raster.any()
    assert len(layer.objects) == 0
    assert attach_count(layer) == 0
    assert attach_value_distribution(layer) == {}
    assert attach_area_stats(layer) == {}


def test_eight_way_layer_has_fewer_regions():
    values = [5, 0, 0, 5]
    four = ConnectedComponentsLabeling(connectivity=4).execute(values, 2, 2)
    eight = ConnectedComponentsLabeling(connectivity=8).execute(values, 2, 2)

    assert len(four.objects) == 2
    assert len(eight.objects) == 1
    assert eight.objects["activation"].iloc[0] == 0.5


def test_full_workflow(sample_grid):
    """Label, filter, attach statistics and summarize."""
    values, width, height = sample_grid
    manager = LayerManager()

    labeling = ConnectedComponentsLabeling(connectivity="four-way")
    labeled_layer = labeling.execute(values, width, height, layer_manager=manager, layer_name="Base_Labeling")
    assert manager.active_layer is labeled_layer
    assert len(labeled_layer.objects) == 7

    # every foreground pixel carries the id of exactly one region
    grid = np.array(values).reshape(height, width)
    assert np.array_equal(labeled_layer.raster > 0, grid > 0)
    for segment_id, value in zip(labeled_layer.objects["segment_id"], labeled_layer.objects["value"]):
        assert set(np.unique(grid[labeled_layer.raster == segment_id])) == {value}

    labeled_layer.attach_function(attach_value_distribution, name="value_distribution")
    distribution = labeled_layer.get_function_result("value_distribution")
    assert distribution["total"] == 7
    assert distribution["counts"] == {v: 1 for v in range(1, 8)}

    labeled_layer.attach_function(attach_area_stats, name="area_by_value", by_value=True)
    area_stats = labeled_layer.get_function_result("area_by_value")
    assert area_stats["total_area"] == float((grid > 0).sum())
    assert area_stats["value_areas"][3] == 29.0

    labeled_layer.attach_function(attach_area_stats, name="area_stats")
    assert labeled_layer.get_function_result("area_stats")["max_area"] == 29.0

    labeled_layer.attach_function(attach_shape_metrics, name="shape_metrics")
    metrics = labeled_layer.get_function_result("shape_metrics")
    assert metrics["fill_ratio"]["max"] == 1.0
    assert "aspect_ratio" in labeled_layer.objects.columns

    assert attach_count(labeled_layer, value=6) == 1

    large_layer = select_by_area(labeled_layer, min_area=3, layer_manager=manager, layer_name="Large")
    assert large_layer.parent is labeled_layer
    assert set(large_layer.objects["value"]) == {3, 5, 6}
    assert set(large_layer.regions) == set(large_layer.objects["segment_id"])
    assert set(np.unique(large_layer.raster)) == {0} | set(large_layer.objects["segment_id"])

    value_layer = select_by_value(large_layer, 5, layer_manager=manager)
    assert value_layer.name == "Large_value_filtered"
    assert list(value_layer.objects["value"]) == [5]
    assert value_layer.raster.astype(bool).sum() == 11

    summary = calculate_statistics_summary(manager)
    assert list(summary) == ["Base_Labeling", "Large", "Large_value_filtered"]
    assert summary["Base_Labeling"]["region_count"] == 7
    assert summary["Large"]["parent"] == "Base_Labeling"
    assert "value_distribution" in summary["Base_Labeling"]["functions"]


def test_select_by_area_missing_column(small_layer):
    with pytest.raises(ValueError):
        select_by_area(small_layer, min_area=1, area_column="perimeter")


def test_layer_manager():
    manager = LayerManager()
    first = manager.add_layer(Layer(name="first"))
    second = manager.add_layer(Layer(name="second"))

    assert manager.get_layer("first") is first
    assert manager.get_layer(second.id) is second
    assert manager.get_layer_names() == ["first", "second"]

    manager.remove_layer("second")
    assert manager.active_layer is first

    with pytest.raises(ValueError):
        manager.get_layer("second")


def test_layer_copy(small_layer):
    copied = small_layer.copy()

    assert copied.name == f"{small_layer.name}_copy"
    copied.raster[0, 0] = 0
    assert small_layer.raster[0, 0] == 1
    assert copied.regions == small_layer.regions
