"""LLM rewrite endpoint backing the task rewriter."""
from __future__ import annotations

from time import perf_counter

from fastapi import APIRouter, HTTPException, Request, status

from clarityhq.api.schemas.rewrite import RewriteRequest, RewriteResponse
from clarityhq.core.context import current_request_id
from clarityhq.observability.metrics import log_latency, log_metric
from clarityhq.observability.tracing import trace
from clarityhq.services.rewrite_service import RewriteFailed, RewriteUnavailable, rewrite_prompt

router = APIRouter()


@router.post("/ai/rewrite", response_model=RewriteResponse, tags=["ai"])
def rewrite(request: Request, payload: RewriteRequest) -> RewriteResponse:
    request_id = current_request_id(request)
    start = perf_counter()
    with trace("ai.rewrite", metadata={"prompt_length": len(payload.prompt)}, request_id=request_id):
        try:
            result = rewrite_prompt(payload.prompt)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing prompt in request body")
        except RewriteUnavailable:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Rewrite service is not configured")
        except RewriteFailed:
            log_metric("ai.rewrite.success", 0)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Rewrite provider error")

    log_metric("ai.rewrite.success", 1)
    log_latency("ai.rewrite", start)
    return RewriteResponse(result=result, request_id=request_id or "")
