# -*- coding: utf-8 -*-
"""Testing Working Document!

Just a workspace document to try the library on the sample grid.
"""

import logging

from rasterregions import (
    ConnectedComponentsLabeling,
    LayerManager,
    attach_area_stats,
    attach_shape_metrics,
    attach_value_distribution,
    calculate_statistics_summary,
    create_sample_data,
    select_by_area,
)


def run_example(connectivity="four-way"):
    """Run Example."""
    manager = LayerManager()

    values, width, height = create_sample_data()
    print(f"Grid dimensions: {width}x{height}")

    print(f"\nLabeling with {connectivity} connectivity...")
    labeling = ConnectedComponentsLabeling(connectivity=connectivity)
    labeled_layer = labeling.execute(values, width, height, layer_manager=manager, layer_name="Base_Labeling")
    print(labeled_layer)

    for segment_id, region in labeled_layer.regions.items():
        bbox = region.bounding_box
        print(
            f"  region {segment_id}: value={region.value} pixels={len(region)} "
            f"bbox=({bbox.x}, {bbox.y}, {bbox.width}, {bbox.height}) activation={region.activation_percentage:.2f}"
        )

    print("\nRegion id raster:")
    print(labeled_layer.raster)

    labeled_layer.attach_function(attach_value_distribution, name="value_distribution")
    labeled_layer.attach_function(attach_area_stats, name="area_by_value", by_value=True)
    labeled_layer.attach_function(attach_shape_metrics, name="shape_metrics")
    print("\nValue distribution:", labeled_layer.get_function_result("value_distribution"))
    print("Area by value:", labeled_layer.get_function_result("area_by_value"))

    print("\nSelecting regions with at least 3 pixels...")
    large_layer = select_by_area(labeled_layer, min_area=3, layer_manager=manager, layer_name="Large_Regions")
    print(large_layer)

    print("\nSummary:")
    for name, layer_summary in calculate_statistics_summary(manager).items():
        print(f"  {name}: {layer_summary}")

    return manager


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_example()
