# service configuration
# the codec itself reads nothing from here; the http layer passes values in

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

UTC = timezone.utc


class Settings(BaseSettings):
    # timezone used to render and read the Date column
    timezone: str = "UTC"

    # uploads
    max_upload_bytes: int = 5 * 1024 * 1024

    # export
    export_filename: str = "Journal-Export"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="JOURNAL_CSV_", env_file=".env", extra="ignore")

    @property
    def tz(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return UTC
        return ZoneInfo(self.timezone)


settings = Settings()
