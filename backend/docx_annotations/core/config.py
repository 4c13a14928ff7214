from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # Nomes das partes dentro do pacote .docx
    COMMENTS_PART: str = "word/comments.xml"
    DOCUMENT_PART: str = "word/document.xml"
    NUMBERING_PART: str = "word/numbering.xml"

    XML_CHUNK_SIZE: int = 65536
    UNKNOWN_COLOR_LABEL: str = "<unknown>"

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    class Config:
        env_file = ".env"

settings = Settings()
