from app.models.diagnosis import DiagnosisReport, DiagnosisRequest

SYSTEM_PROMPT = (
    "You are a professional car mechanic that provides structured, smart "
    "diagnoses from sound and user text."
)

NO_AUDIO_MARKER = "No audio was provided. You must rely only on the user's text inputs."

REPLY_FORMAT = """Please reply using this format:

1. Provide a diagnosis: ...
2. Add a personalized message: ...
3. Include a GRAVITY level: ...
4. Include a DANGER level: ...
5. Provide a ROUGH COST ESTIMATE: ...
6. End with a next recommended step: ..."""

DIAGNOSIS_PROMPT = """You are an expert auto mechanic AI. Your job is to diagnose car problems based on the information provided.

User description:
- Noise: {description}
- Location: {location}
- Situation: {situation}
- Vehicle: {make_model}
- Notes: {notes}
{report_details}
{audio_section}

Also, highlight what the user can check or fix by themselves at home. Focus on simple inspections, maintenance, or easy replacements before recommending a mechanic.

{reply_format}
"""


def _or(value: str | None, fallback: str) -> str:
    value = (value or "").strip()
    return value or fallback


def _report_lines(report: DiagnosisReport | None) -> list[str]:
    """Extra detail from the structured form that the legacy fields do not carry."""
    if report is None:
        return []
    lines = []
    if report.situations:
        lines.append(f"- Happens when: {', '.join(report.situations)}")

    sound = report.soundProfile
    if sound:
        if sound.labels:
            lines.append(f"- Sound type: {', '.join(sound.labels)}")
        if sound.rhythm:
            lines.append(f"- Rhythm: {sound.rhythm}")
        if sound.duration:
            lines.append(f"- Duration: {sound.duration}")
        if sound.pitchLevel:
            lines.append(f"- Pitch (1-5): {sound.pitchLevel}")
        if sound.severityLevel:
            lines.append(f"- Perceived severity (1-5): {sound.severityLevel}")

    driving = report.driving
    if driving:
        if driving.speedRange:
            lines.append(f"- Speed range: {driving.speedRange}")
        if driving.reproducible:
            lines.append(f"- Reproducible: {driving.reproducible}")

    vehicle = report.vehicle
    if vehicle:
        if vehicle.mileage is not None:
            lines.append(f"- Mileage: {vehicle.mileage:.0f}")
        if vehicle.transmission:
            lines.append(f"- Transmission: {vehicle.transmission}")
        if vehicle.fuel:
            lines.append(f"- Fuel: {vehicle.fuel}")
        if vehicle.obdCode:
            lines.append(f"- OBD-II code: {vehicle.obdCode}")
        if vehicle.warningLights:
            lines.append(f"- Warning lights: {', '.join(vehicle.warningLights)}")

    if report.recentEvents:
        lines.append(f"- Recent events: {', '.join(report.recentEvents)}")
    return lines


def build_diagnosis_prompt(request: DiagnosisRequest, transcript: str = "") -> str:
    """Compose the user prompt for the completion service."""
    report_details = "\n".join(_report_lines(request.report))
    if transcript:
        audio_section = f'Transcription of the car noise: "{transcript}"'
    else:
        audio_section = NO_AUDIO_MARKER

    return DIAGNOSIS_PROMPT.format(
        description=_or(request.description, "Not specified"),
        location=_or(request.location, "Not specified"),
        situation=_or(request.situation, "Not specified"),
        make_model=_or(request.makeModel, "Not specified"),
        notes=_or(request.notes, "None"),
        report_details=report_details,
        audio_section=audio_section,
        reply_format=REPLY_FORMAT,
    )
