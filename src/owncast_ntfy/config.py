from pydantic import BaseModel, ConfigDict
import os
import re
from owncast_ntfy.errors import ConfigError

# group 1 is the ntfy server, group 2 the topic
NTFY_URL_RE = re.compile(r"(https?://.*?)/([-a-zA-Z0-9()@:%_\+.~#?&=]+)$")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    ntfy_url: str
    ntfy_server_url: str
    ntfy_topic: str
    ntfy_basic_auth: str | None = None
    allow_insecure: bool = False
    markdown: bool = False
    host: str = "0.0.0.0"
    port: int = 8080
    ntfy_timeout: float = 10.0
    log_level: str = "INFO"

    @property
    def masked_basic_auth(self) -> str | None:
        if not self.ntfy_basic_auth:
            return None
        user, _, password = self.ntfy_basic_auth.partition(":")
        return f"{user}:{'*' * min(len(password), 20)}" if password else user


def parse_ntfy_url(url: str) -> tuple[str, str]:
    """Split ``https://ntfy.sh/mytopic`` into ``("https://ntfy.sh", "mytopic")``."""
    if not url:
        raise ConfigError("NTFY_URL is required")
    if not url.startswith("http"):
        raise ConfigError("NTFY_URL must start with http or https")
    m = NTFY_URL_RE.match(url)
    if not m:
        raise ConfigError(
            "NTFY_URL must follow the format https://ntfy.sh/<topic>. "
            "(you may use a custom ntfy server)"
        )
    return m.group(1), m.group(2)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_number(name: str, default: str, kind=int):
    raw = os.getenv(name, default)
    try:
        return kind(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    # Simple env loader; a .env file next to the process fills in what is unset
    from dotenv import load_dotenv
    load_dotenv()
    ntfy_url = os.getenv("NTFY_URL", "").strip()
    server_url, topic = parse_ntfy_url(ntfy_url)

    port = _env_number("PORT", "8080")
    if not (1 <= port <= 65535):
        raise ConfigError(f"Invalid port number: {port}. Must be between 1-65535")
    timeout = _env_number("NTFY_TIMEOUT", "10", kind=float)
    if timeout <= 0:
        raise ConfigError("NTFY_TIMEOUT must be positive")

    return Settings(
        ntfy_url=ntfy_url,
        ntfy_server_url=server_url,
        ntfy_topic=topic,
        ntfy_basic_auth=os.getenv("NTFY_BASIC_AUTH") or None,
        allow_insecure=_env_bool("ALLOW_INSECURE"),
        markdown=_env_bool("MARKDOWN"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        ntfy_timeout=timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
