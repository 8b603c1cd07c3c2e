"""Запуск: python -m app (из каталога backend)."""

from __future__ import annotations

import uvicorn

from app.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:build_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "dev",
        log_config=None,
    )


if __name__ == "__main__":
    main()
