from dataclasses import dataclass

FALLBACK_PREFIX = "Could not fetch hint from Gemini"
NO_HINT_FOUND = "No hint found in Gemini response."


@dataclass(frozen=True)
class HintSuccess:
    text: str


@dataclass(frozen=True)
class HintFailure:
    reason: str                            # short diagnostic, shown to the player


HintResult = HintSuccess | HintFailure


def text_or_fallback(result: HintResult) -> str:
    """Collapse a hint result into a string that is always safe to display."""
    if isinstance(result, HintSuccess):
        return result.text
    return f"{FALLBACK_PREFIX}: {result.reason}"
