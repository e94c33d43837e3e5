from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class FaceObservationRequest(BaseModel):
    """One detected face: [x, y, width, height] box plus its embedding"""
    box: List[float] = Field(..., min_length=4, max_length=4)
    embedding: Optional[List[float]] = None

    @field_validator("box")
    @classmethod
    def box_has_area(cls, value: List[float]) -> List[float]:
        if value[2] <= 0 or value[3] <= 0:
            raise ValueError("box width and height must be positive")
        return value


class FrameObservationRequest(BaseModel):
    """Detector output for one frame; frame_jpeg_base64 enables headshot capture"""
    faces: List[FaceObservationRequest] = Field(default_factory=list)
    frame_jpeg_base64: Optional[str] = None


class FrameObservationResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None


class PipelineStatusResponse(BaseModel):
    running: bool
    in_flight: int = 0
