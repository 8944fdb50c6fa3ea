import uvicorn

from rfp_analyzer.config.settings import Settings
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.server.app import create_app


def main() -> None:
    """Entry point: load settings -> build app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    if not settings.jwt_secret:
        Log.warning("JWT_SECRET is not set; every authenticated request will be rejected")

    app = create_app(settings)
    Log.info(
        "Starting RFP analysis server",
        host=settings.api_host,
        port=settings.api_port,
        llm_provider=settings.llm_provider,
        model=settings.llm_model_name,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
