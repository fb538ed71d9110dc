from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field


class EnvSettings(BaseSettings):
    uri: str = Field("", alias="LDAPCHECK_URI")
    search_base: str = Field("", alias="LDAPCHECK_BASE")

    log_level: str = Field("WARNING", alias="LDAPCHECK_LOG_LEVEL")
    log_file: str = Field("", alias="LDAPCHECK_LOG_FILE")

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
