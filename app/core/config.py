from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import validator

class Settings(BaseSettings):
    PROJECT_NAME: str = "LASU Legal CMS"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Case management API for the LASU legal unit"
    API_V1_STR: str = "/api/v1"

    # Paths of the privileged user-administration functions
    FUNCTIONS_PREFIX: str = "/functions/v1"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://localhost:8080",
    ]

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_SERVICE_ROLE_KEY: str

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Performance
    ENABLE_RESPONSE_COMPRESSION: bool = True

    # User provisioning
    MIN_PASSWORD_LENGTH: int = 6
    DEFAULT_DEPARTMENT: str = "Legal"

    # Dashboard
    URGENT_HEARING_WINDOW_HOURS: int = 72

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
