"""FastAPI application entrypoint for genstubs service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..compilers import GeneratorCompiler
from ..orchestrator import CompilerFailure, Orchestrator
from ..registry import StaticClassRegistry
from ..stubs import render_tree


class ClassPayload(BaseModel):
    module: str
    name: Optional[str] = None
    base: Optional[str] = None
    arguments: List[Dict[str, Any]] = Field(default_factory=list)
    options: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class GenerateRequest(BaseModel):
    classes: List[ClassPayload]
    root_class: Optional[str] = None
    builtin_namespaces: List[str] = Field(default_factory=list)


class FailureModel(BaseModel):
    compiler: str
    class_name: str
    message: str


class GenerateResponse(BaseModel):
    files: Dict[str, str]
    failures: List[FailureModel]


class HealthResponse(BaseModel):
    status: str


def _generate(payload: GenerateRequest) -> Tuple[Dict[str, str], List[CompilerFailure]]:
    registry = StaticClassRegistry.from_payload(
        {"classes": [entry.model_dump() for entry in payload.classes]}
    )
    compiler = GeneratorCompiler(
        registry,
        root_class=payload.root_class,
        builtin_namespaces=payload.builtin_namespaces or None,
    )
    orchestrator = Orchestrator(registry=registry, compilers=[compiler])
    tree, failures = orchestrator.build_tree([compiler])
    files = {str(path): text for path, text in render_tree(tree).items()}
    return files, failures


def create_app() -> FastAPI:
    """Create the FastAPI application exposing stub generation over synthetic class graphs."""

    app = FastAPI(title="genstubs service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(payload: GenerateRequest) -> GenerateResponse:
        loop = asyncio.get_running_loop()
        files, failures = await loop.run_in_executor(None, _generate, payload)
        return GenerateResponse(
            files=files,
            failures=[
                FailureModel(
                    compiler=failure.compiler,
                    class_name=failure.class_name,
                    message=failure.message,
                )
                for failure in failures
            ],
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    try:
        import uvicorn
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install genstubs[service]`."
        ) from exc

    uvicorn.run(create_app(), host=host, port=port)
