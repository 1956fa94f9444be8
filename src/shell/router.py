from pathlib import Path
from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, JSONResponse

from src.config import Settings, get_settings

router = APIRouter()


def _resolve_asset(static_dir: Path, path: str) -> Path | None:
    if not path:
        return None
    candidate = (static_dir / path).resolve()
    if not candidate.is_relative_to(static_dir.resolve()) or not candidate.is_file():
        return None
    return candidate


@router.get("/{path:path}", include_in_schema=False)
def serve_app_shell(path: str, settings: Settings = Depends(get_settings)):
    static_dir = Path(settings.STATIC_DIR)

    asset = _resolve_asset(static_dir, path)
    if asset:
        return FileResponse(asset)

    index_file = static_dir / "index.html"
    if not index_file.is_file():
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Application shell not found"},
        )
    return FileResponse(index_file)
