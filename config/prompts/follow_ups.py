"""Follow-up suggestion prompt (small, tool-free sub-call)."""

from __future__ import annotations

FOLLOW_UP_SYSTEM_PROMPT = """\
You suggest what a teacher might ask a curriculum assistant next.

Read the conversation and propose 3-4 short follow-up requests the teacher
could send, written in the teacher's voice (e.g. "Adapt this for ELL students").
Each suggestion must be under 12 words and build on what was just discussed.

Respond with ONLY a JSON array of strings. No prose, no code fences.
"""


def build_follow_up_prompt(transcript: str) -> str:
    """User message for the suggestion call, wrapping a flattened transcript."""
    return (
        "Conversation so far:\n\n"
        f"{transcript}\n\n"
        "Return the JSON array of follow-up suggestions."
    )
