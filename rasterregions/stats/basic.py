# -*- coding: utf-8 -*-
"""Basic statistics for labeled layers."""


def attach_count(layer, value=None):
    """Count regions in a layer, optionally only those of one pixel value.

    Parameters:
    -----------
    layer : Layer
        Layer to count regions in
    value : int, optional
        Pixel value to filter by

    Returns:
    --------
    count : int
        Number of regions
    """
    if layer.objects is None:
        return 0

    if value is not None:
        return int((layer.objects["value"] == value).sum())

    return layer.objects.shape[0]


def attach_value_distribution(layer):
    """Calculate how regions are distributed across pixel values.

    Parameters:
    -----------
    layer : Layer
        Layer to analyze

    Returns:
    --------
    distribution : dict
        Region counts and percentages keyed by pixel value, plus the total
    """
    if layer.objects is None or len(layer.objects) == 0:
        return {}

    value_counts = layer.objects["value"].value_counts().sort_index()
    total_count = len(layer.objects)
    value_percentages = (value_counts / total_count * 100).round(2)

    distribution = {
        "counts": {int(k): int(v) for k, v in value_counts.items()},
        "percentages": {int(k): float(v) for k, v in value_percentages.items()},
        "total": total_count,
    }

    return distribution
