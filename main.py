"""
main.py  —  MetaLens FastAPI Server
────────────────────────────────────
Fetch a page, pull out its SEO metadata (title, description, canonical,
Open Graph, Twitter Card), score it and show search / social previews.

HOW TO RUN LOCALLY:
  uvicorn main:app --reload --port 3001
  (or simply: python main.py, which honours $PORT)

URLS:
  /                    GET   →  Dashboard (?url=... runs an analysis)
  /fetch-url?url=...   GET   →  Server-side fetch proxy
  /api/analyze         POST  →  Analysis as JSON
  /api/health          GET   →  Health check
  /docs                      →  Swagger API docs
"""
from __future__ import annotations
import time, logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates

import config
from core_async import ContentSource, default_source, run_analysis_async
from fetcher import FetchError, fetch_page
from schemas import (
    AnalyzeRequest, AnalyzeResponse, ErrorResponse, FetchResponse,
    HealthResponse, MetadataModel, FeedbackModel, FeedbackSummaryModel,
    FieldRowModel, PreviewsModel, SearchPreviewModel, SocialCardModel,
)
from seo.feedback import summarise
from session import AnalysisState

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("metalens")

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


# ── Startup / Shutdown ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("=" * 55)
    log.info("  MetaLens starting ...")
    log.info("  Environment:  {}".format("production" if config.IS_PRODUCTION else "local dev"))
    if config.PROXY_URL:
        log.info("  Fetching via: remote proxy {}".format(config.PROXY_URL))
    else:
        log.info("  Fetching via: in-process fetcher")
    log.info("  Fetch limits: {:g}s timeout, {} bytes".format(
        config.FETCH_TIMEOUT, config.MAX_CONTENT_BYTES))
    if not config.IS_PRODUCTION:
        log.info("  Local URL:    http://localhost:{}".format(config.PORT))
    log.info("=" * 55)
    yield
    log.info("MetaLens shutting down.")


# ── FastAPI App ───────────────────────────────────────────────────────────────
app = FastAPI(
    title="MetaLens",
    description="""
## MetaLens: SEO meta tag analyzer

Fetch any page, inspect its meta tags and preview how it looks in search
results and social shares.

| Method | Path | Description |
|--------|------|-------------|
| `GET` | `/fetch-url?url=` | Server-side fetch proxy |
| `POST` | `/api/analyze` | Extract, score and preview a page |
| `GET` | `/api/health` | Health check |
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
# The proxy exists to be called from browsers on other origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Request timing log ────────────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.time()
    response = await call_next(request)
    ms = round((time.time() - t0) * 1000)
    log.info("{:6}  {:<40}  {}  {}ms".format(
        request.method, str(request.url.path), response.status_code, ms))
    return response


def get_content_source() -> ContentSource:
    return default_source()


# ─────────────────────────────────────────────────────────────────────────────
# PROXY
# ─────────────────────────────────────────────────────────────────────────────

@app.get(
    "/fetch-url",
    response_model=FetchResponse,
    tags=["Proxy"],
    summary="Fetch a URL server-side",
    description="Returns the raw body of `url` as text, whatever its content type.",
    responses={
        400: {"model": ErrorResponse, "description": "Missing url parameter"},
        500: {"model": ErrorResponse, "description": "Upstream fetch failed"},
    },
)
async def fetch_url(url: Optional[str] = None):
    if not url:
        return JSONResponse(status_code=400, content={"error": "URL parameter is required."})

    try:
        contents = await fetch_page(url)
    except FetchError as e:
        log.warning("Error fetching external URL {}: {}".format(url, e))
        return JSONResponse(status_code=500, content={"error": "Failed to fetch URL: {}".format(e)})

    return {"contents": contents}


# ─────────────────────────────────────────────────────────────────────────────
# ANALYZER
# ─────────────────────────────────────────────────────────────────────────────

@app.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    tags=["Analyzer"],
    summary="Analyse a page's meta tags",
    description="""
Fetches the page and returns:
- the 14 extracted metadata fields
- ordered feedback (title, description, canonical, Open Graph, Twitter)
- search and social card previews

A failed fetch is reported with `status: "error"` and no partial results.
    """,
    responses={400: {"model": ErrorResponse, "description": "Empty URL"}},
)
async def analyze(body: AnalyzeRequest, source: ContentSource = Depends(get_content_source)):
    if not body.url:
        return JSONResponse(status_code=400, content={"error": "URL is required."})
    state = await run_analysis_async(body.url, source)
    return _build_response(state)


@app.get(
    "/api/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check",
)
async def health_check():
    return HealthResponse()


# ─────────────────────────────────────────────────────────────────────────────
# DASHBOARD
# ─────────────────────────────────────────────────────────────────────────────

@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(request: Request, url: str = "",
                    source: ContentSource = Depends(get_content_source)):
    """Render the dashboard; with ?url= it runs an analysis first."""
    url = url.strip()
    if url:
        state = await run_analysis_async(url, source)
    else:
        state = AnalysisState.idle()
    return TEMPLATES.TemplateResponse(request, "index.html", {"state": state})


# ─────────────────────────────────────────────────────────────────────────────
# HELPER FUNCTIONS
# ─────────────────────────────────────────────────────────────────────────────

def _build_response(state: AnalysisState) -> AnalyzeResponse:
    """Convert a finished AnalysisState into a validated AnalyzeResponse."""
    if not state.has_results:
        return AnalyzeResponse(status=state.status, url=state.url, error=state.error or None)

    feedback = state.feedback
    previews = state.previews
    og, tw   = previews.open_graph, previews.twitter

    return AnalyzeResponse(
        status         = state.status,
        url            = state.url,
        metadata       = MetadataModel(**state.metadata.as_dict()),
        feedback       = [FeedbackModel(severity=i.severity, message=i.message) for i in feedback],
        summary        = FeedbackSummaryModel(**summarise(feedback)),
        fields         = [FieldRowModel(key=k, value=v) for k, v in state.fields],
        previews       = PreviewsModel(
            search     = SearchPreviewModel(
                url         = previews.search.url,
                title       = previews.search.title,
                description = previews.search.description,
            ),
            open_graph = SocialCardModel(
                image=og.image, fallback_image=og.fallback_image,
                title=og.title, description=og.description, hostname=og.hostname,
            ),
            twitter    = SocialCardModel(
                image=tw.image, fallback_image=tw.fallback_image,
                title=tw.title, description=tw.description, handle=tw.handle,
            ),
        ),
        content_length = len(state.contents),
    )


# ─────────────────────────────────────────────────────────────────────────────
# LOCAL DEV ENTRY POINT
# ─────────────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host      = "0.0.0.0",
        port      = config.PORT,
        reload    = not config.IS_PRODUCTION,
        log_level = "info",
    )
