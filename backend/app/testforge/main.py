"""TestForge - Application Factory

装配配置、日志、数据库与路由；其余路径回退到前端静态页面
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

from testforge.api.routes import router as api_router
from testforge.core.config import Settings, load_settings
from testforge.database.config import configure_database
from testforge.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _resolve_frontend_file(frontend_dir: Path, full_path: str) -> Optional[Path]:
    """请求路径 -> 前端目录内的文件；越界或不存在时返回 None"""
    if not full_path:
        return None
    candidate = (frontend_dir / full_path).resolve()
    if frontend_dir not in candidate.parents:
        return None
    return candidate if candidate.is_file() else None


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings)
    engine = configure_database(settings)

    app = FastAPI(title="TestForge")
    app.state.settings = settings
    app.state.engine = engine
    app.include_router(api_router)

    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"ok": True}

    frontend_dir = Path(settings.FRONTEND_DIR).resolve()

    # 必须最后注册：未匹配的 GET 一律交给单页应用
    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_frontend(full_path: str):
        static_file = _resolve_frontend_file(frontend_dir, full_path)
        if static_file is not None:
            return FileResponse(static_file)
        index_file = frontend_dir / "index.html"
        if not index_file.is_file():
            raise HTTPException(status_code=404, detail="Frontend not found.")
        return FileResponse(index_file)

    logger.info(f"TestForge 已启动: env={settings.ENV}, frontend={frontend_dir}")
    return app
