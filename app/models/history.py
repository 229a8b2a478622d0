from pydantic import BaseModel


class PayloadSummary(BaseModel):
    """Short summary of the request a history entry came from."""
    description: str | None = None
    location: str | None = None
    primarySituation: str | None = None
    soundLabels: list[str] = []


class HistoryEntry(BaseModel):
    timestamp: str
    diagnosis: str = ""
    severity: str = ""
    dangerLevel: str = ""
    payloadSummary: PayloadSummary | None = None
