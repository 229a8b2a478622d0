"""Registry of tutorial and parts links keyed by noise keywords.

A row contributes its suggestions when any of its keywords shows up in the
diagnosis reply. Rows are matched in the order listed here, which is also the
order suggestions are shown in.

To add a group: append a row with case-insensitive keywords and
(text, url) pairs. URLs must be unique across the whole table or the later
duplicate is dropped at match time.
"""

SUGGESTION_ROWS = [
    {
        "keywords": ["cliquetis", "ticking", "clatter"],
        "suggestions": [
            {"text": "Check the timing belt tensioner", "url": "https://www.youtube.com/watch?v=yWsdEWh_4Co"},
            {"text": "Fix engine clatter (video)", "url": "https://www.youtube.com/watch?v=CEZ8kG9pU_I"},
        ],
    },
    {
        "keywords": ["squealing", "belt", "sifflement", "serpentine"],
        "suggestions": [
            {"text": "Inspect serpentine belt", "url": "https://www.youtube.com/watch?v=UFjYbzQ0kAw"},
            {"text": "Replace squeaky belt", "url": "https://www.youtube.com/watch?v=1t4QzOAQf5A"},
        ],
    },
    {
        "keywords": ["grinding", "brake", "frein", "screeching"],
        "suggestions": [
            {"text": "Replace brake pads", "url": "https://www.youtube.com/watch?v=lU6OKQxSg8U"},
            {"text": "Brake pad guide", "url": "https://www.autozone.com/diy/brakes/how-to-replace-brake-pads"},
        ],
    },
    {
        "keywords": ["knocking", "engine knock"],
        "suggestions": [
            {"text": "Check engine oil level", "url": "https://www.youtube.com/watch?v=agS-LsOY7L0"},
        ],
    },
    {
        "keywords": ["rattling", "loose part", "vibration"],
        "suggestions": [
            {"text": "Check for loose heat shield", "url": "https://www.youtube.com/watch?v=ul_Sg2g5PiE"},
            {"text": "Diagnose rattling sounds", "url": "https://www.youtube.com/watch?v=lGRuFzTyI1I"},
        ],
    },
    {
        "keywords": ["battery", "won't start", "clicking", "electrical"],
        "suggestions": [
            {"text": "How to test a car battery", "url": "https://www.youtube.com/watch?v=COJr7OB23Hw"},
            {"text": "Jump-start your car", "url": "https://www.youtube.com/watch?v=Fe2tqCzpF2Q"},
        ],
    },
    {
        "keywords": ["overheating", "coolant", "temperature", "radiator"],
        "suggestions": [
            {"text": "Check coolant levels", "url": "https://www.youtube.com/watch?v=I0o7n6nzt_8"},
            {"text": "Signs of a bad thermostat", "url": "https://www.youtube.com/watch?v=PI6I5xkfpDs"},
        ],
    },
    {
        "keywords": ["exhaust", "smoke", "muffler", "loud"],
        "suggestions": [
            {"text": "Diagnose exhaust smoke", "url": "https://www.youtube.com/watch?v=q9aM9Ch97U8"},
            {"text": "Fix exhaust leak (DIY)", "url": "https://www.youtube.com/watch?v=x5BvL1BeBLs"},
        ],
    },
    {
        "keywords": ["check engine", "code", "OBD", "light"],
        "suggestions": [
            {"text": "How to scan OBD2 codes", "url": "https://www.youtube.com/watch?v=6TlcPRlau2Q"},
            {
                "text": "Free engine code check at AutoZone",
                "url": "https://www.autozone.com/landing/page.jsp?name=free-check-engine-light-service",
            },
        ],
    },
]
