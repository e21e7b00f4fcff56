"""Instance-mask post-processing for prototype-based segmentation models."""

__version__ = "0.1.0"
