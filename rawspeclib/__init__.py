from ._version import __version__
from .models import (
    SIZE,
    DEFAULT_CENTER,
    SampleBuffer,
    SpectrogramResult,
    Point,
    SelectionRect,
    SelectionPhase,
    PointerKind,
    PointerEvent,
)
from .audio import LoadError, load_samples, samples_from_bytes, save_samples
from .window import window_coefficients
from .transform import TransformSizeError, transform_frame, transform_frames
from .colormap import hsl_to_rgba, hsl_to_rgba_array
from .spectrogram import (
    build_spectrogram,
    column_count,
    log_magnitudes,
    sample_range,
)
from .viewport import IDENTITY, Viewport, compose
from .selection import SelectionController
from .config import (
    default_config,
    merge_configs,
    param_spec,
    validate_config,
    validate_config_fields,
    validate_param_values,
    load_preset,
    save_preset,
    ConfigError,
    ConfigFieldError,
    ParamSpec,
    ANALYSIS_PARAMS,
)
from .reports import build_summary, save_json
from .events import EventBus

__all__ = [
    "__version__",
    "SIZE",
    "DEFAULT_CENTER",
    "SampleBuffer",
    "SpectrogramResult",
    "Point",
    "SelectionRect",
    "SelectionPhase",
    "PointerKind",
    "PointerEvent",
    "LoadError",
    "load_samples",
    "samples_from_bytes",
    "save_samples",
    "window_coefficients",
    "TransformSizeError",
    "transform_frame",
    "transform_frames",
    "hsl_to_rgba",
    "hsl_to_rgba_array",
    "build_spectrogram",
    "column_count",
    "log_magnitudes",
    "sample_range",
    "IDENTITY",
    "Viewport",
    "compose",
    "SelectionController",
    "default_config",
    "merge_configs",
    "param_spec",
    "validate_config",
    "validate_config_fields",
    "validate_param_values",
    "load_preset",
    "save_preset",
    "ConfigError",
    "ConfigFieldError",
    "ParamSpec",
    "ANALYSIS_PARAMS",
    "build_summary",
    "save_json",
    "EventBus",
]
