# -*- coding: utf-8 -*-
"""Utility helpers for sample data and layer summaries."""
