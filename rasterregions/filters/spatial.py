# -*- coding: utf-8 -*-
"""Selection filters over labeled regions.

Each filter derives a new layer from a source layer, keeping a subset of the region objects and zeroing the ids of
every discarded region in the copied raster so the raster and the objects stay in sync.
"""

import numpy as np

from ..core.layer import Layer


def _derived_layer(source_layer, objects, layer_name, metadata, layer_manager):
    result_layer = Layer(name=layer_name, parent=source_layer, type="filter")
    result_layer.transform = source_layer.transform
    result_layer.crs = source_layer.crs
    result_layer.metadata = metadata
    result_layer.objects = objects

    kept_ids = set(int(segment_id) for segment_id in objects["segment_id"])
    result_layer.regions = {segment_id: region for segment_id, region in source_layer.regions.items() if segment_id in kept_ids}

    if source_layer.raster is not None:
        segments_raster = source_layer.raster.copy()
        mask = np.isin(segments_raster, list(kept_ids))
        segments_raster[~mask] = 0
        result_layer.raster = segments_raster

    if layer_manager:
        layer_manager.add_layer(result_layer)

    return result_layer


def select_by_area(
    source_layer,
    min_area=None,
    max_area=None,
    area_column="area_pixels",
    layer_manager=None,
    layer_name=None,
):
    """Select regions based on area.

    Parameters:
    -----------
    source_layer : Layer
        Source layer with regions to filter
    min_area : float, optional
        Minimum area threshold (inclusive)
    max_area : float, optional
        Maximum area threshold (inclusive)
    area_column : str
        Column containing area values, "area_pixels" or "area_units"
    layer_manager : LayerManager, optional
        Layer manager to add the result layer to
    layer_name : str, optional
        Name for the result layer

    Returns:
    --------
    result_layer : Layer
        Layer with the selected regions
    """
    if source_layer.objects is None or area_column not in source_layer.objects.columns:
        raise ValueError(f"Column '{area_column}' not found in layer objects")

    if not layer_name:
        layer_name = f"{source_layer.name}_area_filtered"

    objects = source_layer.objects.copy()

    if min_area is not None:
        objects = objects[objects[area_column] >= min_area]

    if max_area is not None:
        objects = objects[objects[area_column] <= max_area]

    metadata = {
        "filter_type": "select_by_area",
        "min_area": min_area,
        "max_area": max_area,
        "area_column": area_column,
    }

    return _derived_layer(source_layer, objects, layer_name, metadata, layer_manager)


def select_by_value(source_layer, values, layer_manager=None, layer_name=None):
    """Keep only the regions whose pixel value is one of values."""
    if source_layer.objects is None:
        raise ValueError("Layer has no region objects")

    if np.isscalar(values):
        values = [values]
    values = [int(v) for v in values]

    if not layer_name:
        layer_name = f"{source_layer.name}_value_filtered"

    objects = source_layer.objects[source_layer.objects["value"].isin(values)].copy()

    metadata = {
        "filter_type": "select_by_value",
        "values": values,
    }

    return _derived_layer(source_layer, objects, layer_name, metadata, layer_manager)
