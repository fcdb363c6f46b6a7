import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration class for environment variables and service settings.
    """

    # Service settings
    service_name: str = os.getenv("SERVICE_NAME", "jd_renderer")
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "True").lower() == "true"

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "DEBUG")
    json_logs: bool = os.getenv("JSON_LOGS", "True").lower() == "true"

    # Upstream platform API (serves the image proxy)
    api_base_url: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    api_token: str | None = os.getenv("API_TOKEN", None)
    image_proxy_path: str = os.getenv("IMAGE_PROXY_PATH", "/api/v1/corporates/proxy-image")

    # Logo resolution settings
    image_strategy_timeout: float = float(os.getenv("IMAGE_STRATEGY_TIMEOUT", "10.0"))
    image_max_bytes: int = int(os.getenv("IMAGE_MAX_BYTES", str(5 * 1024 * 1024)))

    # Rendering settings (A4 at 96 dpi is 794 x 1123 CSS px)
    render_viewport_width: int = int(os.getenv("RENDER_VIEWPORT_WIDTH", "794"))
    render_viewport_height: int = int(os.getenv("RENDER_VIEWPORT_HEIGHT", "1123"))
    render_scale: float = float(os.getenv("RENDER_SCALE", "1.5"))
    jpeg_quality: int = int(os.getenv("JPEG_QUALITY", "85"))
    reflow_passes: int = int(os.getenv("REFLOW_PASSES", "3"))
    settle_delay: float = float(os.getenv("SETTLE_DELAY", "1.0"))
    render_timeout: float = float(os.getenv("RENDER_TIMEOUT", "60.0"))
    browser_headless: bool = os.getenv("BROWSER_HEADLESS", "True").lower() == "true"

    # Branding used when no company profile is available
    platform_name: str = os.getenv("PLATFORM_NAME", "HireKarma")

    @property
    def proxy_url(self) -> str:
        """Absolute URL of the image proxy endpoint."""
        return f"{self.api_base_url.rstrip('/')}{self.image_proxy_path}"

    # Environment-specific logging configuration
    @property
    def logging_config(self) -> dict:
        """
        Returns logging configuration based on environment.
        """
        base_config = {
            "app_name": self.service_name,
            "log_level": self.log_level,
            "json_logs": self.json_logs,
        }

        if self.environment == "development":
            base_config.update({"json_logs": False, "log_level": "DEBUG" if self.debug else "INFO"})

        return base_config

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
