"""
levdist.config — runtime settings.

Values come from the environment (prefix ``LEVDIST_``) or a local ``.env``
file, for example::

    LEVDIST_MAX_INPUT_SIZE=250
    LEVDIST_STRESS_ITERATIONS=500
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Longest "shorter argument" the bounded engine accepts
    max_input_size: int = Field(default=100, ge=0)

    # stress_test.py driver
    stress_iterations: int = Field(default=10000, ge=0)
    stress_max_length: int = Field(default=90, ge=1)
    stress_alphabet: str = Field(default="abcde", min_length=1)
    stress_seed: int = 42

    model_config = SettingsConfigDict(
        env_prefix="LEVDIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
