# app/api/client.py

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, JSONResponse

from app.config import settings

router = APIRouter(tags=["client"])


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_client(full_path: str):
    """정적 파일이 있으면 그대로, 없으면 클라이언트 index.html (SPA 라우팅)"""
    static_root = Path(settings.static_dir).resolve()

    if full_path:
        candidate = (static_root / full_path).resolve()
        # static 디렉토리 밖으로 나가는 경로는 무시
        if static_root in candidate.parents and candidate.is_file():
            return FileResponse(candidate)

    index_file = static_root / "index.html"
    if index_file.is_file():
        return FileResponse(index_file)
    return JSONResponse(status_code=404, content={"message": "Not found"})
