"""Inference backends producing raw segmentation outputs."""

from .base import InferenceBackend, normalize_outputs, prepare_input

# Lazy imports for backends with heavy dependencies
def __getattr__(name):
    if name == "TorchScriptBackend":
        from .torch_backend import TorchScriptBackend
        return TorchScriptBackend
    if name == "OnnxBackend":
        from .onnx_backend import OnnxBackend
        return OnnxBackend
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "InferenceBackend",
    "OnnxBackend",
    "TorchScriptBackend",
    "normalize_outputs",
    "prepare_input",
]
