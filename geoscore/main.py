import logging
import os
from typing import Any, Dict, List
import numpy as np
from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from .schemas import OutputRecord, HealthResponse
from .model import MissingFieldError, RandomSource, transform, transform_many

logging.basicConfig(level=os.getenv("GEOSCORE_LOG_LEVEL", "INFO").upper(),
                    format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("geoscore-api")

app = FastAPI(title="Geoscore Conversion API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("GEOSCORE_CORS_ORIGINS", "*").split(","),
    allow_credentials=True, allow_methods=["*"], allow_headers=["*"]
)

_PROBE = {"zip": {"latitude": 34, "longitude": -120}}

def get_rng() -> RandomSource:
    # one generator per request, nothing shared between callers
    return np.random.default_rng()

@app.get("/health", response_model=HealthResponse)
def health():
    try:
        transform(_PROBE)
        return HealthResponse(status="ok")
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"scorer_error: {e}")

@app.post("/transform", response_model=OutputRecord)
def score(record: Dict[str, Any] = Body(...), rng: RandomSource = Depends(get_rng)):
    try:
        return transform(record, rng)
    except MissingFieldError as e:
        logger.warning("Rejected record: %s", e)
        raise HTTPException(status_code=400, detail=f"missing_field: {e}")

@app.post("/transform/batch", response_model=List[OutputRecord])
def score_batch(records: List[Dict[str, Any]] = Body(...), rng: RandomSource = Depends(get_rng)):
    try:
        return transform_many(records, rng)
    except MissingFieldError as e:
        logger.warning("Rejected batch of %d records: %s", len(records), e)
        raise HTTPException(status_code=400, detail=f"missing_field: {e}")
