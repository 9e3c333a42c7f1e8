# =============================================================================
# core/config.py  —  Environment-driven settings
# =============================================================================
#
# All knobs come from environment variables (optionally from a .env file,
# loaded by the entry points with python-dotenv before this is read):
#
#   PORT         unset → stdio transport; set → streamable HTTP on this port
#   HOST         HTTP bind address                 (default "0.0.0.0")
#   MCP_PATH     HTTP endpoint path                (default "/mcp")
#   LOG_LEVEL    root logging level                (default "INFO")
#   AGENT_MODEL  LiteLlm model string for agent/   (default GPT-4o via OpenRouter)
#
# The upstream base URL is NOT configurable; see core/transport_api.py.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class ServerSettings:
    port: Optional[int] = None
    host: str = "0.0.0.0"
    mcp_path: str = "/mcp"
    log_level: str = "INFO"

    @property
    def use_http(self) -> bool:
        return self.port is not None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        env = os.environ if environ is None else environ

        port = None
        raw_port = env.get("PORT", "").strip()
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None

        return cls(
            port=port,
            host=env.get("HOST", "0.0.0.0"),
            mcp_path=env.get("MCP_PATH", "/mcp"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def get_agent_model(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return env.get("AGENT_MODEL", DEFAULT_AGENT_MODEL)
