from pydantic import BaseModel

NOT_SPECIFIED = "Not specified"


class SoundProfile(BaseModel):
    labels: list[str] = []
    rhythm: str | None = None
    duration: str | None = None
    pitchLevel: int | None = None
    severityLevel: int | None = None


class DrivingContext(BaseModel):
    speedRange: str | None = None
    reproducible: str | None = None


class VehicleInfo(BaseModel):
    makeModel: str | None = None
    mileage: float | None = None
    transmission: str | None = None
    fuel: str | None = None
    obdCode: str | None = None
    warningLights: list[str] = []


class DiagnosisReport(BaseModel):
    """Structured form payload the browser sends alongside the legacy fields."""

    description: str | None = None
    audioAttached: bool = False
    location: str | None = None
    primarySituation: str | None = None
    situations: list[str] = []
    soundProfile: SoundProfile | None = None
    driving: DrivingContext | None = None
    vehicle: VehicleInfo | None = None
    recentEvents: list[str] = []
    notes: str | None = None
    timestamp: str | None = None


class DiagnosisRequest(BaseModel):
    description: str | None = None
    location: str | None = None
    situation: str | None = None
    makeModel: str | None = None
    notes: str | None = None
    report: DiagnosisReport | None = None


class AudioUpload(BaseModel):
    filename: str = "recording.webm"
    content_type: str = "audio/webm"
    data: bytes = b""


class Suggestion(BaseModel):
    text: str
    url: str


class DiagnosisResult(BaseModel):
    diagnosis: str = NOT_SPECIFIED
    message: str = NOT_SPECIFIED
    severity: str = NOT_SPECIFIED
    dangerLevel: str = NOT_SPECIFIED
    costEstimate: str = NOT_SPECIFIED
    nextStep: str = NOT_SPECIFIED
    transcript: str = ""
    suggestions: list[Suggestion] = []


class ErrorResponse(BaseModel):
    error: str
