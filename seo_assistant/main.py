import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seo_assistant.api_routers.v1 import api_router
from seo_assistant.features.health.routes.health import router as health_router
from seo_assistant.platform.config import settings
from seo_assistant.platform.exceptions import add_exception_handlers

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title=settings.APP_NAME,
    description="Single-page SEO audits rendered in a headless browser",
    version="1.0.0",
    debug=settings.DEBUG,
)


@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "description": "Renders a page, checks its on-page SEO signals and scores them.",
        "version": "1.0.0",
        "docs_url": "/docs",
        "api_base": "/api/v1",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(health_router)
app.include_router(api_router, prefix="/api/v1")
