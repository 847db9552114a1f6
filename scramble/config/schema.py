# scramble/config/schema.py
from pydantic import BaseModel, Field

_WORD_MAX = 2**64 - 1

class SeedConfig(BaseModel):
    # Two 64-bit words of the 128-bit generator seed
    high: int = Field(default=123, ge=0, le=_WORD_MAX)
    low: int = Field(default=456, ge=0, le=_WORD_MAX)

class AppConfig(BaseModel):
    seed: SeedConfig = Field(default_factory=SeedConfig)
    digest: str = "sha256" # Name in the digest registry
    indent: int = Field(default=2, ge=0)
    sort_keys: bool = True
    warn_dates: bool = True # Log duplicate/missing puzzle dates
    log_to_file: bool = False
