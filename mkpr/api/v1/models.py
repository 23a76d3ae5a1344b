from fastapi import APIRouter

from mkpr.api.v1.schemas import ModelInfo, ModelListResponse
from mkpr.core.config import settings
from mkpr.infra.llm.models import format_size, list_models, resolve_model_name

router = APIRouter(prefix="/models", tags=["models"])


@router.get("", response_model=ModelListResponse)
async def get_models() -> ModelListResponse:
    """로컬 Ollama에 설치된 모델 목록"""
    models = await list_models()
    current = resolve_model_name(settings.ollama_model, [m.name for m in models])

    return ModelListResponse(
        current_model=current,
        models=[
            ModelInfo(
                name=m.name,
                size=format_size(m.size) if m.size is not None else "N/A",
                current=m.name == current,
            )
            for m in models
        ],
    )
