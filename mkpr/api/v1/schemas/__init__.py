from mkpr.api.v1.schemas.pr import (
    GenerateRequest,
    ModelInfo,
    ModelListResponse,
    PRDescriptionResponse,
    RenderRequest,
)

__all__ = [
    "GenerateRequest",
    "RenderRequest",
    "PRDescriptionResponse",
    "ModelInfo",
    "ModelListResponse",
]
