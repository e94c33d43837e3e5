"""
Observations API: the face detector posts per-frame results here.

Frames are resolved in the background; the response only says whether the
frame was taken for processing.
"""

import base64
import binascii
import logging

from fastapi import APIRouter, HTTPException, status

from ...application.dto.observation_dto import (
    FrameObservationRequest,
    FrameObservationResponse,
    PipelineStatusResponse,
)
from ...application.services.observation_pipeline import FaceObservation, ObservationPipeline
from ...di.container import get_container
from ...utils.headshot_image import decode_image

logger = logging.getLogger(__name__)
router = APIRouter(tags=["observations"])


@router.post("", response_model=FrameObservationResponse, status_code=status.HTTP_202_ACCEPTED)
async def submit_observation(request: FrameObservationRequest) -> FrameObservationResponse:
    pipeline = get_container().get(ObservationPipeline)
    if not pipeline.is_running:
        return FrameObservationResponse(accepted=False, reason="pipeline stopped")

    frame = None
    if request.frame_jpeg_base64:
        try:
            frame = decode_image(base64.b64decode(request.frame_jpeg_base64, validate=True))
        except (binascii.Error, ValueError) as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid frame image: {e}")

    faces = [FaceObservation(box=face.box, embedding=face.embedding) for face in request.faces]
    task = pipeline.submit_frame(faces, frame)
    if task is None:
        return FrameObservationResponse(accepted=False, reason="no face with embedding or throttled")
    return FrameObservationResponse(accepted=True)


@router.get("/pipeline", response_model=PipelineStatusResponse)
async def pipeline_status() -> PipelineStatusResponse:
    pipeline = get_container().get(ObservationPipeline)
    return PipelineStatusResponse(running=pipeline.is_running, in_flight=pipeline.in_flight)


@router.post("/pipeline/start", response_model=PipelineStatusResponse)
async def start_pipeline() -> PipelineStatusResponse:
    pipeline = get_container().get(ObservationPipeline)
    pipeline.start()
    return PipelineStatusResponse(running=pipeline.is_running, in_flight=pipeline.in_flight)


@router.post("/pipeline/stop", response_model=PipelineStatusResponse)
async def stop_pipeline() -> PipelineStatusResponse:
    pipeline = get_container().get(ObservationPipeline)
    pipeline.stop()
    return PipelineStatusResponse(running=pipeline.is_running, in_flight=pipeline.in_flight)
