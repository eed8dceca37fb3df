# --- dimlang: HTTP API (FastAPI) ---------------------------------------------
# Purpose: Minimal API that runs unit-aware programs and exposes the unit
# catalog. Language errors are reported in the response body (ok=false with
# error_kind); only malformed requests produce HTTP errors.
# Run with: uvicorn api.main:app   (or python -m api.main)
# ------------------------------------------------------------------------------

from __future__ import annotations
from fastapi import FastAPI, HTTPException

from dimlang import __version__
from dimlang.catalog import default_catalog, use_catalog
from dimlang.config import load_settings
from dimlang.interpreter import run_program
from dimlang.models import RunRequest, RunResult

# Load .env / environment once at import (catalog override, bind address)
settings = load_settings()
if settings.catalog_path:
    use_catalog(settings.catalog_path)

app = FastAPI(title="dimlang API", version=__version__)

# ----------------------------- Routes -----------------------------------------
@app.get("/health")
def health(): return {"ok": True}

@app.get("/units")
def list_units():
    """
    Quick introspection: list units, their dimensions, conversion rates and
    accepted aliases from the loaded catalog.
    """
    items = default_catalog().list_units()
    return {"count": len(items), "items": items}

@app.post("/run", response_model=RunResult)
def run(req: RunRequest) -> RunResult:
    """
    Parse and execute `req.source`. The response always carries the bindings
    made before any failure, so partial progress is visible to the caller.
    """
    if not req.source.strip():
        # 400: nothing to run
        raise HTTPException(status_code=400, detail="Empty program.")
    result = run_program(req.source)
    if not req.trace:
        result.trace = []
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
