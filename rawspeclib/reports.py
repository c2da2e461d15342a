from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Any

from .models import SIZE, SampleBuffer, SpectrogramResult
from .viewport import Viewport


def build_summary(
    buffer: SampleBuffer,
    result: SpectrogramResult,
    viewport: Viewport | None,
) -> dict[str, Any]:
    """Collect the numbers shown by the CLI table and written to JSON."""
    return {
        "samples": len(buffer),
        "center": float(buffer.center),
        "frame_size": SIZE,
        "grid": {"width": result.width, "height": result.height},
        "sample_range": [result.sample_start, result.sample_stop],
        "viewport": None if viewport is None else {
            "offset": [viewport.offset.x, viewport.offset.y],
            "size": [viewport.size.x, viewport.size.y],
        },
        "z_min": result.z_min,
        "z_max": result.z_max,
    }


def save_json(
    buffer: SampleBuffer,
    result: SpectrogramResult,
    viewport: Viewport | None,
    config: dict[str, Any],
    output_path: str,
) -> None:
    """Generate JSON output for automation tools."""
    source = buffer.path or config.get("_source_file", "")
    data = {
        "schema_version": "1.0",
        "timestamp": datetime.now().isoformat(),
        "source_file": os.path.abspath(source) if source else None,
        "config": {
            "center": config.get("center"),
            "decimation": config.get("decimation"),
            "z_low": config.get("z_low"),
            "z_high": config.get("z_high"),
            "workers": config.get("workers"),
        },
        "spectrogram": build_summary(buffer, result, viewport),
    }
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4, ensure_ascii=False)
