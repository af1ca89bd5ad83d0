# -*- coding: utf-8 -*-
"""Layer containers for labeling results.

A layer couples a region-id raster with the region objects derived from it, so filters and statistics can work on
the vector side while keeping the raster consistent. Layers remember the layer they were derived from, and a
LayerManager keeps track of every layer produced during a workflow.
"""

import logging
import uuid

import pandas as pd

logger = logging.getLogger(__name__)


class Layer:
    """A set of labeled regions plus the raster they were read from.

    Layers are produced by labeling or derived from another layer by a filter. Functions can be attached to a
    layer to compute and keep additional results.
    """

    def __init__(self, name=None, parent=None, type="generic"):
        """Initialize a Layer.

        Parameters:
        -----------
        name : str, optional
            Name of the layer. If None, a unique name will be generated.
        parent : Layer, optional
            Layer this one is derived from
        type : str
            "labeling", "filter" or "generic"
        """
        self.id = str(uuid.uuid4())
        self.name = name if name else f"Layer_{self.id[:8]}"
        self.parent = parent
        self.type = type
        self.created_at = pd.Timestamp.now()

        self.raster = None
        self.objects = None
        self.regions = {}
        self.metadata = {}
        self.transform = None
        self.crs = None

        self.attached_functions = {}

    def attach_function(self, function, name=None, **kwargs):
        """Execute function(self, **kwargs) and keep its result on the layer.

        Parameters:
        -----------
        function : callable
            Function taking the layer as first argument
        name : str, optional
            Key for the result. Defaults to function.__name__
        **kwargs : dict
            Arguments passed to the function

        Returns:
        --------
        self : Layer
            Returns self for chaining
        """
        func_name = name if name else function.__name__

        result = function(self, **kwargs)

        self.attached_functions[func_name] = {
            "function": function,
            "args": kwargs,
            "result": result,
        }

        return self

    def get_function_result(self, function_name):
        """Get the result of an attached function.

        Raises:
        -------
        ValueError
            If no function was attached under that name
        """
        if function_name not in self.attached_functions:
            raise ValueError(f"Function '{function_name}' not attached to this layer")

        return self.attached_functions[function_name]["result"]

    def region(self, segment_id):
        """Return the Region behind a segment id of this layer."""
        if segment_id not in self.regions:
            raise ValueError(f"Segment {segment_id} not found in layer '{self.name}'")

        return self.regions[segment_id]

    def copy(self):
        """Create a copy of this layer.

        Returns:
        --------
        layer_copy : Layer
        """
        new_layer = Layer(name=f"{self.name}_copy", parent=self.parent, type=self.type)

        if self.raster is not None:
            new_layer.raster = self.raster.copy()

        if self.objects is not None:
            new_layer.objects = self.objects.copy()

        new_layer.regions = dict(self.regions)
        new_layer.metadata = self.metadata.copy()
        new_layer.transform = self.transform
        new_layer.crs = self.crs

        return new_layer

    def __str__(self):
        """String representation of the layer."""
        num_objects = len(self.objects) if self.objects is not None else 0
        parent_name = self.parent.name if self.parent else "None"

        return f"Layer '{self.name}' (type: {self.type}, parent: {parent_name}, regions: {num_objects})"


class LayerManager:
    """Manages a collection of layers and their relationships."""

    def __init__(self):
        """Initialize the layer manager."""
        self.layers = {}
        self.active_layer = None

    def add_layer(self, layer, set_active=True):
        """Add a layer to the manager.

        Parameters:
        -----------
        layer : Layer
            Layer to add
        set_active : bool
            Whether to set this layer as the active layer

        Returns:
        --------
        layer : Layer
            The added layer
        """
        self.layers[layer.id] = layer
        logger.debug("Added layer '%s' (%s)", layer.name, layer.type)

        if set_active:
            self.active_layer = layer

        return layer

    def get_layer(self, layer_id_or_name):
        """Get a layer by ID or name.

        Raises:
        -------
        ValueError
            If no layer has that ID or name
        """
        if layer_id_or_name in self.layers:
            return self.layers[layer_id_or_name]

        for layer in self.layers.values():
            if layer.name == layer_id_or_name:
                return layer

        raise ValueError(f"Layer '{layer_id_or_name}' not found")

    def get_layer_names(self):
        """Names of all managed layers, in insertion order."""
        return [layer.name for layer in self.layers.values()]

    def remove_layer(self, layer_id_or_name):
        """Remove a layer, moving the active layer to the most recent remaining one if needed."""
        layer = self.get_layer(layer_id_or_name)
        del self.layers[layer.id]

        if self.active_layer and self.active_layer.id == layer.id:
            self.active_layer = list(self.layers.values())[-1] if self.layers else None
