"""Game-object framework: prioritised object registry, transforms, sprites, meshes, keyframe motion and WAVE sound banks."""

__version__ = "0.1.0"