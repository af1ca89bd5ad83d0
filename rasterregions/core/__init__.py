# -*- coding: utf-8 -*-
"""The core package holds the labeling algorithm and the data structures around it.

It defines the disjoint-set forest, the connected-components labeler with its region descriptors, and the layers
that carry labeling results through a workflow.
"""
