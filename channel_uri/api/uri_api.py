from __future__ import annotations

import os
from typing import Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ..ingestion.batch_ingestion import channel_row
from ..uri.builder import ChannelUriBuilder
from ..uri.parser import MalformedUri, parse_uri
from ..utils.config import load_config, section, CONFIG_PATH
from ..utils.logger import logger, setup_logging


class ParseRequest(BaseModel):
    uri: str


class ParseResponse(BaseModel):
    scheme: str
    media: str
    params: Dict[str, str]
    canonical: str


class BatchItemResponse(BaseModel):
    source: str
    ok: bool
    scheme: str | None = None
    media: str | None = None
    params: Dict[str, str] = Field(default_factory=dict)
    canonical: str | None = None
    error: str | None = None


class SerializeRequest(BaseModel):
    media: str = ""
    params: Dict[str, str] = Field(default_factory=dict)


class SerializeResponse(BaseModel):
    canonical: str


app = FastAPI(title="Channel URI API")


def _load_config() -> Dict[str, object]:
    try:
        return load_config(CONFIG_PATH)
    except FileNotFoundError:
        return {}


CONFIG = _load_config()
METRICS = {"parsed": 0, "rejected": 0, "serialized": 0}


@app.on_event("startup")
async def configure_logging() -> None:
    log_cfg = section(CONFIG, "logging")
    log_dir = str(log_cfg.get("dir") or os.path.join(os.path.dirname(os.path.dirname(__file__)), "..", "logs"))
    setup_logging(log_dir, level=str(log_cfg.get("level", "INFO")))


def _max_batch() -> int:
    return int(section(CONFIG, "api").get("max_batch", 1000))


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics")
async def metrics() -> Dict[str, int]:
    return dict(METRICS)


@app.post("/parse", response_model=ParseResponse)
async def parse_channel(payload: ParseRequest) -> ParseResponse:
    try:
        uri = parse_uri(payload.uri)
    except MalformedUri as exc:
        METRICS["rejected"] += 1
        logger.info("Rejected channel {!r}: {}", payload.uri, exc.reason)
        raise HTTPException(status_code=400, detail=exc.reason)
    METRICS["parsed"] += 1
    return ParseResponse(scheme=uri.scheme, media=uri.media, params=dict(uri.params), canonical=str(uri))


@app.post("/parse/batch", response_model=List[BatchItemResponse])
async def parse_channel_batch(payloads: List[ParseRequest]) -> List[BatchItemResponse]:
    if len(payloads) > _max_batch():
        raise HTTPException(status_code=413, detail=f"Batch exceeds {_max_batch()} items")
    out: List[BatchItemResponse] = []
    for p in payloads:
        row = channel_row(p.uri)
        if row["ok"]:
            METRICS["parsed"] += 1
        else:
            METRICS["rejected"] += 1
        out.append(BatchItemResponse(**row))
    return out


@app.post("/serialize", response_model=SerializeResponse)
async def serialize_channel(payload: SerializeRequest) -> SerializeResponse:
    try:
        canonical = ChannelUriBuilder(payload.media, payload.params).build_string()
    except MalformedUri as exc:
        raise HTTPException(status_code=400, detail=exc.reason)
    METRICS["serialized"] += 1
    return SerializeResponse(canonical=canonical)
