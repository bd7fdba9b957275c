from typing import Optional
from pydantic import BaseModel

class LoggingConfig(BaseModel):
    log_file: Optional[str] = "timebank.log"      # Defaultwert, None = nur stderr
    log_level: Optional[str] = "INFO"             # Defaultwert
