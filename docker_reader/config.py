from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # docker or podman; auto-detected from PATH when empty
    CONTAINER_RUNTIME: str = ""
    RUNTIME_BINARY: str | None = None

    COMMAND_TIMEOUT_SECONDS: float = 60
    # applies to exec only; list, logs, inspect and stats use COMMAND_TIMEOUT_SECONDS
    EXEC_TIMEOUT_SECONDS: float = 300
    PROBE_TIMEOUT_SECONDS: float = 10

    DEFAULT_LOG_LINES: int = 100

    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    JSON_LOGGING: bool = False

    MCP_SERVER_NAME: str = "docker-reader"
    MCP_TRANSPORT: str = "stdio"


settings = Settings()
