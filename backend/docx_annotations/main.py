from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from docx_annotations.core.config import settings
from docx_annotations.api import endpoints

def create_app() -> FastAPI:
    app = FastAPI(title="DOCX Annotations API")

    # Configuração do CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Inclui as rotas da API
    app.include_router(endpoints.router, prefix="/api", tags=["API"])

    return app

app = create_app()
