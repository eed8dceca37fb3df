# -----------------------------------------------------------------------------
# Configuration
# Purpose: Read runtime settings from the environment, after loading an
# optional .env file (python-dotenv) from the working directory.
#   DIMLANG_SCRIPT     script run by `dimlang run` with no argument (./test.cr)
#   DIMLANG_TRACE      "1"/"true" to write a JSON trace file per run
#   DIMLANG_TRACE_DIR  where trace files go (traces)
#   DIMLANG_CATALOG    alternate unit catalog YAML (packaged catalog if unset)
#   DIMLANG_API_HOST / DIMLANG_API_PORT   bind address for the HTTP API (`python -m api.main`)
# -----------------------------------------------------------------------------

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    script: str = "./test.cr"
    trace: bool = False
    trace_dir: str = "traces"
    catalog_path: Optional[str] = None
    api_host: str = "127.0.0.1"
    api_port: int = 8000


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        script=os.getenv("DIMLANG_SCRIPT", "./test.cr"),
        trace=os.getenv("DIMLANG_TRACE", "").strip().lower() in _TRUTHY,
        trace_dir=os.getenv("DIMLANG_TRACE_DIR", "traces"),
        catalog_path=os.getenv("DIMLANG_CATALOG") or None,
        api_host=os.getenv("DIMLANG_API_HOST", "127.0.0.1"),
        api_port=int(os.getenv("DIMLANG_API_PORT", "8000")),
    )
