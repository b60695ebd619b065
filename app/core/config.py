
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Credit Intake API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"
    public_base_url: str = Field(default="http://localhost:8000", alias="PUBLIC_BASE_URL")
    max_upload_size_mb: int = 10

    # Database (Postgres via asyncpg in production, SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./credit_intake_dev.db",
        alias="DATABASE_URL",
    )

    # Signed links (credit approval e-mails) and derived signature documents
    signature_secret: str = Field(default="default-secret", alias="SIGNATURE_SECRET")
    signed_document_base_url: str = Field(
        default="https://example.com/signed-documents",
        alias="SIGNED_DOCUMENT_BASE_URL",
    )

    # Edge rate limiting (per process)
    rate_limit_window_seconds: int = Field(default=60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_api_requests: int = Field(default=30, alias="RATE_LIMIT_API_REQUESTS")
    rate_limit_page_requests: int = Field(default=100, alias="RATE_LIMIT_PAGE_REQUESTS")

    # Object storage (vendor form uploads)
    aws_access_key_id: str | None = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: str | None = Field(default=None, alias="AWS_SECRET_ACCESS_KEY")
    aws_region: str = Field(default="us-east-2", alias="AWS_REGION")
    aws_s3_bucket_name: str | None = Field(default=None, alias="AWS_S3_BUCKET_NAME")
    upload_url_expiry_seconds: int = Field(
        default=3600, alias="UPLOAD_URL_EXPIRY_SECONDS",
    )

    # OpenAI (optional credit analysis narrative)
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o", alias="OPENAI_MODEL")
    openai_max_tokens: int = Field(default=1500, alias="OPENAI_MAX_TOKENS")
    openai_timeout: int = Field(default=60, alias="OPENAI_TIMEOUT")

    # Credit approval defaults
    approver_email: str = Field(default="credit@example.com", alias="APPROVER_EMAIL")
    default_approved_amount_cents: int = Field(
        default=1_000_000, alias="DEFAULT_APPROVED_AMOUNT_CENTS",
    )  # $10k
    default_approved_terms: str = Field(default="Net 30", alias="DEFAULT_APPROVED_TERMS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def ai_enabled(self) -> bool:
        """AI narratives are available only when an OpenAI key is configured."""
        return bool(self.openai_api_key)

    @property
    def storage_enabled(self) -> bool:
        """Uploads need a bucket and a credential pair."""
        return bool(
            self.aws_s3_bucket_name
            and self.aws_access_key_id
            and self.aws_secret_access_key
        )

settings = Settings()
