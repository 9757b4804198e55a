"""Pydantic settings models for application configuration."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ONE_GIB = 1 << 30


class AppSettings(BaseModel):
    """Application-level settings."""

    model_config = ConfigDict(frozen=True)

    name: str = "tubely-media-service"
    version: str = "0.1.0"
    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class ServerSettings(BaseModel):
    """HTTP server settings."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = Field(default=8091, ge=1, le=65535)
    workers: int = Field(default=1, ge=1, le=32)
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_prefix: str = "/v1"
    docs_enabled: bool = True


class BlobStorageSettings(BaseModel):
    """Object storage settings (MinIO/S3)."""

    model_config = ConfigDict(frozen=True)

    provider: Literal["minio", "s3"] = "minio"
    endpoint: str = "localhost:9000"
    access_key: str = ""
    secret_key: str = ""
    use_ssl: bool = False
    region: str = "us-east-1"
    bucket: str = Field(default="tubely-videos", min_length=1, pattern=r"^[^,]+$")
    presigned_url_expiry_seconds: int = Field(default=3600, ge=1, le=604800)


class DocumentCollectionSettings(BaseModel):
    """Document DB collection names."""

    model_config = ConfigDict(frozen=True)

    videos: str = "videos"


class DocumentDBSettings(BaseModel):
    """Document database settings (MongoDB)."""

    model_config = ConfigDict(frozen=True)

    provider: Literal["mongodb"] = "mongodb"
    host: str = "localhost"
    port: int = 27017
    username: str = ""
    password: str = ""
    database: str = "tubely"
    auth_source: str = "admin"
    collections: DocumentCollectionSettings = Field(
        default_factory=DocumentCollectionSettings
    )


class AuthSettings(BaseModel):
    """Bearer token validation settings."""

    model_config = ConfigDict(frozen=True)

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    issuer: str | None = None


class MediaSettings(BaseModel):
    """Upload staging and remux/probe tool settings."""

    model_config = ConfigDict(frozen=True)

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    staging_dir: str | None = None  # None -> system temp dir
    processed_suffix: str = ".processing"
    max_upload_bytes: int = Field(default=ONE_GIB, ge=1)
    allowed_video_types: list[str] = Field(default_factory=lambda: ["video/mp4"])
    copy_buffer_bytes: int = Field(default=1 << 20, ge=4096)


class TelemetrySettings(BaseModel):
    """Telemetry and observability settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    log_format: Literal["json", "text"] = "json"
    log_level: str = "INFO"


class Settings(BaseSettings):
    """Root settings container with environment loading."""

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    blob_storage: BlobStorageSettings = Field(default_factory=BlobStorageSettings)
    document_db: DocumentDBSettings = Field(default_factory=DocumentDBSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    media: MediaSettings = Field(default_factory=MediaSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TUBELY__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )
