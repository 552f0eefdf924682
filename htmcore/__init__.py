"""Hierarchical temporal memory components: scalar encoder, spatial pooler, temporal memory and grid helpers."""

__version__ = "0.1.0"