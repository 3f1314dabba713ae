import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from astraventa import __version__
from astraventa.api.endpoints import router as api_router
from astraventa.api.services.chat_service import ChatService
from astraventa.api.services.contact_service import ContactEmailService
from astraventa.core.config import Config, get_config
from astraventa.core.logging import configure_root_logging, normalize_log_level
from astraventa.core.provider import build_provider_chain
from astraventa.core.router import ProviderChainRouter


def create_app(app_config: Optional[Config] = None) -> FastAPI:
    """Build the relay app; all per-process state hangs off ``app.state``."""
    app_config = app_config or get_config()

    app = FastAPI(title="Astraventa Relay", version=__version__)
    app.include_router(api_router)

    chat_router = ProviderChainRouter(build_provider_chain(app_config))
    app.state.config = app_config
    app.state.chat_router = chat_router
    app.state.chat_service = ChatService.from_config(app_config, chat_router)
    app.state.contact_service = ContactEmailService.from_config(app_config)
    return app


configure_root_logging(get_config().log_level)
app = create_app()


def main() -> None:
    config = get_config()

    if len(sys.argv) > 1 and sys.argv[1] == "--help":
        print(f"Astraventa Relay v{__version__}")
        print("")
        print("Usage: python -m astraventa.main")
        print("       or: astra start")
        print("")
        print("Provider credentials (tried in this order, unset ones are skipped):")
        for provider_config in config.provider_configs:
            print(f"  {provider_config.api_key_env:<20} - {provider_config.name}")
        print("")
        print("Optional environment variables:")
        print("  HOST            - Server host (default: 0.0.0.0)")
        print("  PORT            - Server port (default: 8787)")
        print("  LOG_LEVEL       - Logging level (default: INFO)")
        print("  CORS_ORIGIN     - Allowed origin (default: *)")
        print("  REQUEST_TIMEOUT - Per-provider timeout in seconds (default: 20)")
        print("  RESEND_API_KEY  - Enables the contact email relay")
        print("")
        print("For the full list, use: astra config docs")
        sys.exit(0)

    log_level = normalize_log_level(config.log_level).lower()

    print(f"🚀 Astraventa Relay v{__version__}")
    print(f"   Server: {config.host}:{config.port}")
    print(f"   CORS Origin: {config.cors_origin}")
    print(f"   Request Timeout: {config.request_timeout:g}s")
    print("")
    for position, provider_config in enumerate(config.provider_configs, start=1):
        status = "✅" if provider_config.is_configured else "⏭️ "
        print(f"   {status} {position}. {provider_config.name:<22} {provider_config.model_identifier}")
    print("")

    uvicorn.run(
        "astraventa.main:app",
        host=config.host,
        port=config.port,
        log_level=log_level,
        access_log=log_level == "debug",
        reload=False,
    )


if __name__ == "__main__":
    main()
