# -*- coding: utf-8 -*-
"""Helpers for building sample grids and summarizing layers."""

import numpy as np

SAMPLE_GRID = [
    [1, 1, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 4, 0, 0, 0, 5, 5, 5, 0, 0, 0, 3],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 5, 0, 0, 0, 3],
    [0, 6, 6, 6, 6, 6, 6, 6, 6, 6, 6, 6, 0, 5, 0, 5, 0, 0, 0, 3],
    [0, 6, 6, 6, 6, 6, 6, 6, 6, 6, 0, 6, 0, 5, 5, 5, 5, 5, 0, 3],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 7, 0, 0, 0, 0, 0, 0, 0, 0, 3],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3],
    [3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3],
]


def create_sample_data(width=20, height=10, seed=None, num_values=3, fill=0.4):
    """Create a grid of class values for testing.

    Parameters:
    -----------
    width : int
        Grid width, ignored when seed is None
    height : int
        Grid height, ignored when seed is None
    seed : int, optional
        When given, a random grid is drawn with numpy's default generator. Otherwise the fixed 20x10 sample grid
        is returned, where every nonzero value forms exactly one four-way connected region.
    num_values : int
        Number of distinct nonzero values in a random grid
    fill : float
        Probability that a random pixel is foreground

    Returns:
    --------
    values : list of int
        Row-major pixel values
    width : int
        Grid width
    height : int
        Grid height
    """
    if seed is None:
        grid = np.array(SAMPLE_GRID, dtype=np.int64)
    else:
        rng = np.random.default_rng(seed)
        foreground = rng.random((height, width)) < fill
        grid = np.where(foreground, rng.integers(1, num_values + 1, size=(height, width)), 0)

    height, width = grid.shape
    return grid.ravel().tolist(), width, height


def calculate_statistics_summary(layer_manager):
    """Summarize every layer held by a layer manager.

    Parameters:
    -----------
    layer_manager : LayerManager
        Layer manager containing layers

    Returns:
    --------
    summary : dict
        Per layer name: type, creation time, parent, region count, pixel totals and attached function names
    """
    summary = {}

    for layer_name in layer_manager.get_layer_names():
        layer = layer_manager.get_layer(layer_name)

        layer_summary = {
            "type": layer.type,
            "created_at": str(layer.created_at),
            "parent": layer.parent.name if layer.parent else None,
        }

        if layer.objects is not None:
            layer_summary["region_count"] = len(layer.objects)

            if len(layer.objects) > 0:
                layer_summary["total_pixels"] = int(layer.objects["area_pixels"].sum())
                layer_summary["mean_pixels"] = float(layer.objects["area_pixels"].mean())
                value_counts = layer.objects["value"].value_counts().to_dict()
                layer_summary["value_counts"] = {int(k): int(v) for k, v in value_counts.items()}

        if layer.attached_functions:
            layer_summary["functions"] = list(layer.attached_functions.keys())

        summary[layer_name] = layer_summary

    return summary
