# -*- coding: utf-8 -*-
"""Spatial statistics for labeled layers."""

import numpy as np


def attach_area_stats(layer, area_column="area_pixels", by_value=False):
    """Calculate area statistics for regions in a layer.

    Parameters:
    -----------
    layer : Layer
        Layer to calculate statistics for
    area_column : str
        Column containing area values
    by_value : bool
        Break the total area down per pixel value

    Returns:
    --------
    stats : dict
        Dictionary with area statistics
    """
    if layer.objects is None or area_column not in layer.objects.columns or len(layer.objects) == 0:
        return {}

    total_area = float(layer.objects[area_column].sum())

    if by_value:
        value_areas = {}
        value_percentages = {}

        for value, group in layer.objects.groupby("value"):
            value_area = float(group[area_column].sum())
            value_areas[int(value)] = value_area
            value_percentages[int(value)] = round(value_area / total_area * 100, 2)

        return {
            "total_area": total_area,
            "value_areas": value_areas,
            "value_percentages": value_percentages,
        }

    areas = layer.objects[area_column]

    return {
        "total_area": total_area,
        "min_area": float(areas.min()),
        "max_area": float(areas.max()),
        "mean_area": float(areas.mean()),
        "median_area": float(areas.median()),
        "std_area": float(np.std(areas)),
    }


def attach_shape_metrics(layer):
    """Calculate bounding box shape metrics for regions in a layer.

    Adds two columns to the layer objects: "aspect_ratio" (box width over box height) and "fill_ratio" (share of
    the box cells covered by the region).

    Parameters:
    -----------
    layer : Layer
        Layer to calculate metrics for

    Returns:
    --------
    metrics : dict
        Mean, min, max and std for each metric
    """
    if layer.objects is None or len(layer.objects) == 0:
        return {}

    objects = layer.objects
    objects["aspect_ratio"] = (objects["bbox_width"] / objects["bbox_height"]).replace([np.inf, -np.inf], np.nan).fillna(0)
    objects["fill_ratio"] = objects["area_pixels"] / (objects["bbox_width"] * objects["bbox_height"])

    metrics = {}
    for column in ("aspect_ratio", "fill_ratio"):
        metrics[column] = {
            "mean": float(objects[column].mean()),
            "min": float(objects[column].min()),
            "max": float(objects[column].max()),
            "std": float(np.std(objects[column])),
        }

    return metrics
