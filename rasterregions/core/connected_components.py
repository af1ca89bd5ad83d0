# -*- coding: utf-8 -*-
"""Connected-components labeling for integer label grids.

Implements the classic two-pass union-find algorithm. The first pass assigns provisional labels in scan order and
records which labels touch, the second pass resolves every pixel to the label held by the root of its equivalence
class, and a final aggregation step turns each class into a Region with its point set and bounding box.

Labeling is value-aware: two adjacent pixels are only connected when they carry exactly the same nonzero value,
so a grid of class ids is segmented by value and connectivity at the same time. Zero is background.
"""

import logging
from collections import namedtuple
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .disjoint_set import DisjointSet

logger = logging.getLogger(__name__)

Point = namedtuple("Point", ["x", "y"])

_FOUR_WAY_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL_OFFSETS = ((-1, -1), (1, -1), (1, 1), (-1, 1))


class Connectivity(str, Enum):
    """Neighbor topology used to decide adjacency."""

    FOUR_WAY = "four-way"
    EIGHT_WAY = "eight-way"

    @classmethod
    def coerce(cls, value):
        """Convert an enum member, its string value or the neighbor count (4 or 8) to a Connectivity."""
        if isinstance(value, cls):
            return value
        if value in (4, "4"):
            return cls.FOUR_WAY
        if value in (8, "8"):
            return cls.EIGHT_WAY
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown connectivity '{value}', expected 'four-way' or 'eight-way'") from None

    @property
    def offsets(self):
        """Neighbor offsets (dx, dy) for this connectivity."""
        if self is Connectivity.EIGHT_WAY:
            return _FOUR_WAY_OFFSETS + _DIAGONAL_OFFSETS
        return _FOUR_WAY_OFFSETS


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle given by its origin and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self):
        return self.x

    @property
    def min_y(self):
        return self.y

    @property
    def max_x(self):
        return self.x + self.width

    @property
    def max_y(self):
        return self.y + self.height

    @property
    def area(self):
        return self.width * self.height

    def contains(self, point):
        """Whether point lies inside the box. The right and bottom edges are exclusive."""
        px, py = point
        return self.min_x <= px < self.max_x and self.min_y <= py < self.max_y

    def expanded_to_contain(self, point):
        """Smallest box containing both this box and point."""
        px, py = point
        min_x = min(self.min_x, px)
        min_y = min(self.min_y, py)
        max_x = max(self.max_x, px)
        max_y = max(self.max_y, py)
        return BoundingBox(min_x, min_y, max_x - min_x, max_y - min_y)


@dataclass(frozen=True)
class Region:
    """A maximal set of connected, equal-valued pixels.

    Attributes:
    -----------
    bounding_box : BoundingBox
        Tightest box covering every member cell
    points : frozenset of Point
        Member pixel coordinates
    value : int
        Pixel value shared by every member
    """

    bounding_box: BoundingBox
    points: frozenset
    value: int = 0

    @property
    def activation_percentage(self):
        """Fraction of the bounding box cells that belong to the region."""
        return len(self.points) / self.bounding_box.area

    def contains(self, point):
        """Whether point is a member of this region."""
        if not self.bounding_box.contains(point):
            return False
        return Point(*point) in self.points

    def __len__(self):
        return len(self.points)


class _ScanState:
    """Mutable state shared by the two passes of a single labeling run."""

    def __init__(self):
        self.current_label = 0
        self.labels = {}
        self.linked = DisjointSet()


class ConnectedComponents:
    """Find the connected components of a row-major integer grid.

    A fresh scan state is built on every call to find_connected_components, so an instance can be reused and will
    always produce the same partition.
    """

    def __init__(self, values, width, height, connectivity=Connectivity.FOUR_WAY):
        """Initialize the labeler.

        Parameters:
        -----------
        values : sequence of int
            Row-major pixel values, index = y * width + x. 0 is background.
        width : int
            Grid width
        height : int
            Grid height
        connectivity : Connectivity, str or int
            "four-way" (4) or "eight-way" (8)

        Raises:
        -------
        ValueError
            If the dimensions are negative, do not match len(values), or connectivity is unknown
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        self.values = tuple(int(v) for v in values)
        if len(self.values) != width * height:
            raise ValueError(f"Grid of {width}x{height} needs {width * height} values, got {len(self.values)}")

        self.width = width
        self.height = height
        self.connectivity = Connectivity.coerce(connectivity)

    def find_connected_components(self):
        """Label the grid and return its regions.

        Returns:
        --------
        regions : list of Region
            One region per connected group of equal nonzero values, in no guaranteed order
        """
        state = _ScanState()
        self._first_pass(state)
        self._second_pass(state)
        regions = self._aggregate(state)

        logger.debug(
            "Labeled %dx%d grid (%s): %d provisional labels, %d regions",
            self.width,
            self.height,
            self.connectivity.value,
            state.current_label,
            len(regions),
        )
        return regions

    def _pixel_value(self, pt):
        """Value at pt, or None when pt is outside the grid."""
        if not (0 <= pt.x < self.width and 0 <= pt.y < self.height):
            return None
        return self.values[pt.y * self.width + pt.x]

    def _neighbors(self, pt):
        return [Point(pt.x + dx, pt.y + dy) for dx, dy in self.connectivity.offsets]

    def _first_pass(self, state):
        for x in range(self.width):
            for y in range(self.height):
                pt = Point(x, y)
                value = self._pixel_value(pt)
                if value == 0:
                    continue

                neighboring_labels = [
                    (neighbor, state.labels[neighbor])
                    for neighbor in self._neighbors(pt)
                    if self._pixel_value(neighbor) == value and neighbor in state.labels
                ]

                if not neighboring_labels:
                    state.linked.make_set(pt)
                    state.labels[pt] = state.current_label
                    state.current_label += 1
                    continue

                state.labels[pt] = min(label for _, label in neighboring_labels)

                # every labeled neighbor joins, not just the one holding the minimum
                for neighbor, _ in neighboring_labels:
                    state.linked.union(pt, neighbor)

    def _second_pass(self, state):
        for x in range(self.width):
            for y in range(self.height):
                pt = Point(x, y)
                if self._pixel_value(pt) == 0:
                    continue

                # the label recorded at the root, not the root coordinate
                state.labels[pt] = state.labels[state.linked.find(pt)]

    def _aggregate(self, state):
        boxes = {}
        points = {}
        values = {}

        for pt, label in state.labels.items():
            if label not in boxes:
                boxes[label] = BoundingBox(pt.x, pt.y, 0, 0)
                points[label] = set()
                values[label] = self._pixel_value(pt)
            points[label].add(pt)
            boxes[label] = boxes[label].expanded_to_contain(pt)

        regions = []
        for label, box in boxes.items():
            # boxes track cell origins, widen by one so the last cell is covered
            bounding_box = BoundingBox(box.x, box.y, box.width + 1, box.height + 1)
            regions.append(Region(bounding_box=bounding_box, points=frozenset(points[label]), value=values[label]))

        return regions


def find_connected_components(values, width, height, connectivity=Connectivity.FOUR_WAY):
    """Find the connected regions of a flat row-major grid.

    Parameters:
    -----------
    values : sequence of int
        Row-major pixel values of length width * height
    width : int
        Grid width
    height : int
        Grid height
    connectivity : Connectivity, str or int
        "four-way" (4) or "eight-way" (8)

    Returns:
    --------
    regions : list of Region
    """
    return ConnectedComponents(values, width, height, connectivity).find_connected_components()


def label_array(array, connectivity=Connectivity.FOUR_WAY):
    """Find the connected regions of a 2D array of shape (height, width).

    Parameters:
    -----------
    array : array_like
        2D integer grid indexed as array[y, x]
    connectivity : Connectivity, str or int
        "four-way" (4) or "eight-way" (8)

    Returns:
    --------
    regions : list of Region
    """
    grid = np.asarray(array)
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2D array, got shape {grid.shape}")

    height, width = grid.shape
    return find_connected_components(grid.ravel(order="C").tolist(), width, height, connectivity)
