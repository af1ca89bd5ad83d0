# -*- coding: utf-8 -*-
"""The stats package computes summaries of labeled regions, meant to be attached to layers."""
