"""FastAPI application entrypoint for promptline service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, load_config
from ..prompt import Prompt


class SegmentModel(BaseModel):
    name: str
    text: str


class ModuleResponse(BaseModel):
    name: str
    present: bool
    style: str = ""
    segments: List[SegmentModel] = []


class PromptResponse(BaseModel):
    prompt: str


class HealthResponse(BaseModel):
    status: str


def _default_prompt() -> Prompt:
    return Prompt()


def create_app(prompt_factory: Callable[[], Prompt] = _default_prompt) -> FastAPI:
    """Create the FastAPI application exposing prompt renders."""

    app = FastAPI(title="promptline", version="0.1.0")

    async def get_prompt() -> Prompt:
        # Fresh per request so no render state is shared.
        return prompt_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/prompt", response_model=PromptResponse)
    async def render_prompt(
        path: str = Query("."),
        plain: bool = Query(False),
        prompt: Prompt = Depends(get_prompt),
    ) -> PromptResponse:
        text = await asyncio.to_thread(prompt.render, path, plain=plain)
        return PromptResponse(prompt=text)

    @app.get("/modules/{name}", response_model=ModuleResponse)
    async def render_module(
        name: str,
        path: str = Query("."),
        prompt: Prompt = Depends(get_prompt),
    ) -> ModuleResponse:
        module = await asyncio.to_thread(prompt.module, name, path)
        if module is None:
            return ModuleResponse(name=name, present=False)
        return ModuleResponse(
            name=module.name,
            present=True,
            style=module.style,
            segments=[SegmentModel(name=s.name, text=s.text) for s in module.segments],
        )

    @app.exception_handler(KeyError)
    async def unknown_module_handler(_: Any, exc: KeyError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": f"Unknown module: {exc.args[0]}"})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8765, config_path: Path | None = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(lambda: Prompt(load_config(config_path)))
    uvicorn.run(app, host=host, port=port)
