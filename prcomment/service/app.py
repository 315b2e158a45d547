"""FastAPI application entrypoint for prcomment service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, TypeVar

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import CompletionError, NotAGitRepository, PRCommentError
from ..orchestrator import Orchestrator

T = TypeVar("T")


class PromptRequest(BaseModel):
    path: str
    template: str


class PromptResponse(BaseModel):
    prompt: str


class GenerateRequest(BaseModel):
    path: str


class GenerateResponse(BaseModel):
    description: str
    current_branch: str
    target_branch: str


class BranchRequest(BaseModel):
    path: str


class BranchResponse(BaseModel):
    current_branch: str
    target_branch: str
    jira_ticket: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


async def _run_blocking(func: Callable[[], T]) -> T:
    # Git subprocesses and the completion call block; keep the loop responsive.
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing prcomment operations."""

    app = FastAPI(title="prcomment Service", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/prompt", response_model=PromptResponse)
    async def build_prompt(
        payload: PromptRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> PromptResponse:
        prompt = await _run_blocking(
            lambda: orchestrator.build_prompt(payload.path, payload.template)
        )
        return PromptResponse(prompt=prompt)

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        result = await _run_blocking(lambda: orchestrator.generate(payload.path))
        return GenerateResponse(
            description=result.description,
            current_branch=result.branch.current,
            target_branch=result.branch.base,
        )

    @app.post("/branch", response_model=BranchResponse)
    async def branch(
        payload: BranchRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> BranchResponse:
        info = await _run_blocking(lambda: orchestrator.branch_info(payload.path))
        return BranchResponse(
            current_branch=info.current_branch,
            target_branch=info.target_branch,
            jira_ticket=info.jira_ticket,
        )

    @app.exception_handler(NotAGitRepository)
    async def not_a_repository_handler(_: Any, exc: NotAGitRepository) -> JSONResponse:
        return JSONResponse(status_code=404, content=_error_content(exc))

    @app.exception_handler(CompletionError)
    async def completion_error_handler(_: Any, exc: CompletionError) -> JSONResponse:
        return JSONResponse(status_code=502, content=_error_content(exc))

    @app.exception_handler(PRCommentError)
    async def pipeline_error_handler(_: Any, exc: PRCommentError) -> JSONResponse:
        return JSONResponse(status_code=400, content=_error_content(exc))

    return app


def _error_content(exc: Exception) -> dict[str, str]:
    return {"detail": str(exc), "kind": exc.__class__.__name__}


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
