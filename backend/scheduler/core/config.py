import os


def GetEnv(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def GetIntEnv(name: str, default: int) -> int:
    raw = GetEnv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def GetBoolEnv(name: str, default: bool = False) -> bool:
    raw = GetEnv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


class SchedulerSettings:
    """Process settings, read from the environment on every access.

    Reading lazily keeps tests free to monkeypatch the environment.
    """

    @property
    def Port(self) -> int:
        return GetIntEnv("TODO_PORT", 7540)

    @property
    def DbFile(self) -> str:
        return GetEnv("TODO_DBFILE", "scheduler.db")

    @property
    def Password(self) -> str | None:
        return GetEnv("TODO_PASSWORD")

    @property
    def WebDir(self) -> str:
        return GetEnv("TODO_WEBDIR", "./web")

    @property
    def TokenTtlHours(self) -> int:
        return GetIntEnv("TODO_TOKEN_TTL_HOURS", 8)

    @property
    def AllowedOrigins(self) -> list[str]:
        raw = GetEnv("ALLOWED_ORIGINS", "")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


Settings = SchedulerSettings()
