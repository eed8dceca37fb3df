from __future__ import annotations
import json
import os
import time
from typing import Any, Dict

from .models import RunResult


def ts() -> str:
    return time.strftime("%Y%m%d_%H%M%SZ", time.gmtime())


def save_trace(trace_dir: str, meta: Dict[str, Any], result: RunResult) -> str:
    # One JSON file per run: meta (script, version), outcome, bindings and steps.
    os.makedirs(trace_dir, exist_ok=True)
    data = {
        "meta": meta,
        "ok": result.ok,
        "error": result.error,
        "error_kind": result.error_kind,
        "bindings": {k: v.model_dump() for k, v in result.bindings.items()},
        "steps": result.trace,
    }
    fpath = os.path.join(trace_dir, f"run_{ts()}.json")
    with open(fpath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return fpath
