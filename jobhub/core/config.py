from pydantic_settings import BaseSettings
from typing import Optional, List, Union
from pydantic import Field, model_validator
import json

class Settings(BaseSettings):

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database
    database_url: str = Field(default="sqlite:///./jobhub.db", alias="DATABASE_URL")

    # JWT
    secret_key: str = Field(default="your-secret-key-here", alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    refresh_token_expire_days: int = Field(default=7, alias="REFRESH_TOKEN_EXPIRE_DAYS")

    # File upload
    max_file_size: int = Field(default=5 * 1024 * 1024, alias="MAX_FILE_SIZE")  # 5MB

    # CORS
    # JSON list or comma separated string, normalised below
    cors_origins: Union[List[str], str] = Field(default=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ], alias="CORS_ORIGINS")

    # AWS S3
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    aws_access_key_id: Optional[str] = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: Optional[str] = Field(default=None, alias="AWS_SECRET_ACCESS_KEY")
    aws_bucket_name: str = Field(default="jobhub-files", alias="BUCKET_NAME")
    presigned_url_expires_seconds: int = Field(default=60 * 60 * 24 * 7, alias="PRESIGNED_URL_EXPIRES_SECONDS")

    # AMQP (RabbitMQ)
    amqp_host: str = Field(default="localhost", alias="AMQP_HOST")
    amqp_port: int = Field(default=5672, alias="AMQP_PORT")
    amqp_user: str = Field(default="guest", alias="AMQP_USER")
    amqp_password: str = Field(default="guest", alias="AMQP_PASSWORD")
    amqp_vhost: str = Field(default="", alias="AMQP_VHOST")

    # Mail
    mail_host: str = Field(default="smtp.gmail.com", alias="MAIL_HOST")
    mail_port: int = Field(default=465, alias="MAIL_PORT")
    mail_user: Optional[str] = Field(default=None, alias="MAIL_USER")
    mail_password: Optional[str] = Field(default=None, alias="MAIL_PASSWORD")
    send_status_mail: bool = Field(default=False, alias="SEND_STATUS_MAIL")

    @property
    def amqp_uri(self) -> str:
        return f"amqp://{self.amqp_user}:{self.amqp_password}@{self.amqp_host}:{self.amqp_port}/{self.amqp_vhost}"

    @model_validator(mode="after")
    def _normalize_cors_origins(self):
        """Accept CORS_ORIGINS as a JSON list or a comma separated string."""
        origins = self.cors_origins
        if isinstance(origins, str):
            try:
                parsed = json.loads(origins)
                if isinstance(parsed, list):
                    self.cors_origins = parsed
            except ValueError:
                self.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]
        return self

    # pydantic v2 model configuration: load `.env` and ignore extra env vars
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

settings = Settings()
