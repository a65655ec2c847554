from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./fittrack.db")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ALLOWED_ORIGINS: list[str] = _as_list(os.getenv("ALLOWED_ORIGINS", "http://localhost:3000"))

    JWT_SECRET: str = os.getenv("JWT_SECRET", "")
    JWT_REFRESH_SECRET: str = os.getenv("JWT_REFRESH_SECRET", "")
    JWT_ADMIN_SECRET: str = os.getenv("JWT_ADMIN_SECRET", "")
    JWT_ALG: str = os.getenv("JWT_ALG", "HS256")
    ACCESS_TOKEN_MINUTES: int = int(os.getenv("ACCESS_TOKEN_MINUTES", "50"))
    REFRESH_TOKEN_MINUTES: int = int(os.getenv("REFRESH_TOKEN_MINUTES", "100"))
    ADMIN_TOKEN_MINUTES: int = int(os.getenv("ADMIN_TOKEN_MINUTES", "10"))
    COOKIE_SECURE: bool = _as_bool(os.getenv("COOKIE_SECURE", "true"))
    COOKIE_SAMESITE: str = os.getenv("COOKIE_SAMESITE", "none")

    SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_SENDER: str = os.getenv("SMTP_SENDER", "")
    SMTP_TIMEOUT_SECONDS: float = float(os.getenv("SMTP_TIMEOUT_SECONDS", "10"))

    CLOUDINARY_CLOUD_NAME: str = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY: str = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET: str = os.getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_BASE_URL: str = os.getenv("CLOUDINARY_BASE_URL", "https://api.cloudinary.com/v1_1")
    CLOUDINARY_TIMEOUT_SECONDS: float = float(os.getenv("CLOUDINARY_TIMEOUT_SECONDS", "30"))

    IMAGE_MAX_WIDTH: int = int(os.getenv("IMAGE_MAX_WIDTH", "800"))
    IMAGE_MAX_BYTES: int = int(os.getenv("IMAGE_MAX_BYTES", str(8 * 1024 * 1024)))

settings = Settings()
