import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_CWA_API_BASE_URL = "https://opendata.cwa.gov.tw/api"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 20.0  # seconds


# Reads a boolean flag the way the deployment scripts set it ("true" / "false").
def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Config:
    """Process-wide settings, built once at startup and passed into the app factory."""

    cwa_api_key: str | None = None
    cwa_api_base_url: str = DEFAULT_CWA_API_BASE_URL
    enable_proxy: bool = False
    proxy_host: str | None = None
    proxy_port: str | None = None
    port: int = DEFAULT_PORT
    env: str = "development"
    request_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "Config":
        load_dotenv(dotenv_path)
        return cls(
            cwa_api_key=os.environ.get("CWA_API_KEY") or None,
            cwa_api_base_url=os.environ.get("CWA_API_BASE_URL", DEFAULT_CWA_API_BASE_URL).rstrip("/"),
            enable_proxy=_env_flag("ENABLE_PROXY"),
            proxy_host=os.environ.get("PROXY_HOST") or None,
            proxy_port=os.environ.get("PROXY_PORT") or None,
            port=int(os.environ.get("PORT", DEFAULT_PORT)),
            env=os.environ.get("APP_ENV", "development"),
            request_timeout=float(os.environ.get("CWA_TIMEOUT", DEFAULT_TIMEOUT)),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_json=_env_flag("LOG_JSON"),
        )

    @property
    def proxy_url(self) -> str | None:
        if not self.enable_proxy or not self.proxy_host:
            return None
        if self.proxy_port:
            return f"http://{self.proxy_host}:{self.proxy_port}"
        return f"http://{self.proxy_host}"

    @property
    def proxies(self) -> dict | None:
        """`requests` proxies mapping, or None for a direct connection."""
        url = self.proxy_url
        if url is None:
            return None
        return {"http": url, "https": url}
