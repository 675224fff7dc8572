"""
Model Showcase Registry

Stores uploaded 3D models in object storage and publishes each one under a
short shareable identifier, with view, like and inventory counters.
"""

__version__ = "1.0.0"
