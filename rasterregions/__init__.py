# -*- coding: utf-8 -*-
# rasterregions/__init__.py

"""
RasterRegions: connected-components labeling for integer label grids
=====================================================================

RasterRegions splits a grid of class values into connected regions using a
two-pass union-find labeling, and wraps the result in layers that can be
filtered and summarized.

Key features:
- Value-aware four-way and eight-way connected-components labeling
- Region descriptors with point sets and bounding boxes
- Layers with a region-id raster and a GeoDataFrame of region objects
- Area and value based region selection
- Region statistics
"""

__version__ = "0.1.0"

from .core.connected_components import (
    BoundingBox,
    ConnectedComponents,
    Connectivity,
    Point,
    Region,
    find_connected_components,
    label_array,
)
from .core.disjoint_set import DisjointSet
from .core.labeling import ConnectedComponentsLabeling
from .core.layer import Layer, LayerManager

from .filters.spatial import select_by_area, select_by_value

from .stats.basic import attach_count, attach_value_distribution
from .stats.spatial import attach_area_stats, attach_shape_metrics

from .utils.helpers import calculate_statistics_summary, create_sample_data
