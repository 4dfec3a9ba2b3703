from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from .configuration import get_config_container
from .exceptions import NoValidBookingsError
from .middleware import RequestLoggingMiddleware
from .models import ConfigMetadata, ErrorResponse, SequenceResponse
from .sequence_service import SequenceService

logger = logging.getLogger(__name__)

sequence_service = SequenceService()
settings = get_config_container(sequence_service.config)

app = FastAPI(title="Boarding Sequencer API", version="0.1.0")

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings["cors"]["allow_origins"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_sequence_service() -> SequenceService:
    return sequence_service


@app.get("/healthz")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/config/defaults", response_model=ConfigMetadata)
def get_config_defaults(service: SequenceService = Depends(get_sequence_service)) -> ConfigMetadata:
    return service.get_config_metadata()


@app.post(
    "/api/sequence",
    response_model=SequenceResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_sequence(
    file: Optional[UploadFile] = File(None),
    service: SequenceService = Depends(get_sequence_service),
) -> SequenceResponse:
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded. Field name must be 'file'.")

    try:
        raw = await file.read()
        await file.close()
        return service.sequence_upload(raw, source=file.filename or "upload")
    except NoValidBookingsError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception(f"Failed to compute boarding sequence for {file.filename!r}")
        raise HTTPException(status_code=500, detail="Server error.") from exc


def run() -> None:
    import uvicorn

    server = settings["server"]
    logging.basicConfig(
        level=str(server["log_level"]).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=server["host"], port=int(server["port"]), log_level=str(server["log_level"]).lower())
