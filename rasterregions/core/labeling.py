# -*- coding: utf-8 -*-
"""Runs connected-components labeling and packages the result as a Layer.

The ConnectedComponentsLabeling class wraps the two-pass labeler: regions smaller than a minimum size are dropped,
the remaining ones are numbered 1..n in a stable order, painted into a region-id raster and described as a
GeoDataFrame whose geometries are the region bounding boxes.
"""

import logging

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.affinity import affine_transform
from shapely.geometry import box

from .connected_components import Connectivity, find_connected_components
from .layer import Layer

logger = logging.getLogger(__name__)

OBJECT_COLUMNS = [
    "segment_id",
    "value",
    "area_pixels",
    "area_units",
    "bbox_x",
    "bbox_y",
    "bbox_width",
    "bbox_height",
    "activation",
]


def _region_sort_key(region):
    first_point = min((pt.y, pt.x) for pt in region.points)
    return (region.bounding_box.y, region.bounding_box.x, region.value, first_point)


class ConnectedComponentsLabeling:
    """Label a grid of class values into connected regions.

    Pixels are grouped when they are adjacent under the chosen connectivity and carry the same nonzero value.
    """

    def __init__(self, connectivity=Connectivity.FOUR_WAY, min_size=1):
        """Initialize the labeling.

        Parameters:
        -----------
        connectivity : Connectivity, str or int
            "four-way" (4) or "eight-way" (8)
        min_size : int
            Regions with fewer pixels are dropped from the result
        """
        self.connectivity = Connectivity.coerce(connectivity)
        self.min_size = min_size

    def execute(self, values, width, height, transform=None, crs=None, layer_manager=None, layer_name=None):
        """Label the grid and create a layer with the results.

        Parameters:
        -----------
        values : sequence of int
            Row-major pixel values of length width * height, 0 is background
        width : int
            Grid width
        height : int
            Grid height
        transform : affine.Affine, optional
            Maps pixel coordinates to world coordinates. Geometries stay in pixel space when None.
        crs : str or pyproj.CRS, optional
            Coordinate reference system of the transformed geometries
        layer_manager : LayerManager, optional
            Layer manager to add the result layer to
        layer_name : str, optional
            Name for the result layer

        Returns:
        --------
        layer : Layer
            Layer holding the region-id raster, the region objects and the Region descriptors
        """
        regions = find_connected_components(values, width, height, self.connectivity)
        total_regions = len(regions)

        regions = sorted((r for r in regions if len(r.points) >= self.min_size), key=_region_sort_key)

        if not layer_name:
            layer_name = f"Labeling_{self.connectivity.value}_min{self.min_size}"

        layer = Layer(name=layer_name, type="labeling")
        layer.transform = transform
        layer.crs = crs
        layer.regions = {segment_id: region for segment_id, region in enumerate(regions, start=1)}
        layer.raster = self._create_label_raster(layer.regions, width, height)
        layer.objects = self._create_region_objects(layer.regions, transform, crs)
        layer.metadata = {
            "connectivity": self.connectivity.value,
            "min_size": self.min_size,
            "width": width,
            "height": height,
            "num_regions": len(regions),
            "num_regions_dropped": total_regions - len(regions),
        }

        logger.info("Layer '%s': %d regions kept, %d dropped", layer_name, len(regions), total_regions - len(regions))

        if layer_manager:
            layer_manager.add_layer(layer)

        return layer

    def _create_label_raster(self, regions, width, height):
        """Paint every region's segment id into a (height, width) raster, 0 elsewhere."""
        raster = np.zeros((height, width), dtype=np.int32)

        for segment_id, region in regions.items():
            xs = [pt.x for pt in region.points]
            ys = [pt.y for pt in region.points]
            raster[ys, xs] = segment_id

        return raster

    def _create_region_objects(self, regions, transform, crs):
        """Describe the regions as a GeoDataFrame of bounding boxes.

        Parameters:
        -----------
        regions : dict
            Segment id to Region
        transform : affine.Affine or None
            Pixel to world transform
        crs : str or pyproj.CRS or None
            Coordinate reference system

        Returns:
        --------
        region_objects : geopandas.GeoDataFrame
            One row per region
        """
        if transform is not None:
            pixel_area = abs(transform.a) * abs(transform.e)
        else:
            pixel_area = 1.0

        geometries = []
        properties = []

        for segment_id, region in regions.items():
            bbox = region.bounding_box
            geometry = box(bbox.min_x, bbox.min_y, bbox.max_x, bbox.max_y)
            if transform is not None:
                geometry = affine_transform(geometry, [transform.a, transform.b, transform.d, transform.e, transform.c, transform.f])

            area_pixels = len(region.points)

            properties.append(
                {
                    "segment_id": segment_id,
                    "value": int(region.value),
                    "area_pixels": area_pixels,
                    "area_units": float(area_pixels * pixel_area),
                    "bbox_x": int(bbox.x),
                    "bbox_y": int(bbox.y),
                    "bbox_width": int(bbox.width),
                    "bbox_height": int(bbox.height),
                    "activation": float(region.activation_percentage),
                }
            )
            geometries.append(geometry)

        frame = pd.DataFrame(properties, columns=OBJECT_COLUMNS)
        return gpd.GeoDataFrame(frame, geometry=geometries, crs=crs)
