# -*- coding: utf-8 -*-
"""The filters package derives new layers from labeled layers.

Filters select regions by their attributes and keep the region-id raster consistent with the selection.
"""
