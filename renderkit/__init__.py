"""Vector and quaternion math, rectangle packing and text-editing state for rendering tools."""

__version__ = "0.1.0"