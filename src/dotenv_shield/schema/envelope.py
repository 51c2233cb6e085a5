"""
Marker envelope around the machine-owned region of a schema file.

In merge mode the generated JSON is written between two sentinel lines so that
hand-written text before and after them survives regeneration untouched:

    // notes kept by a human
    // dotenv-shield:start
    { ...generated schema... }
    // dotenv-shield:end
"""

from dataclasses import dataclass

from ..config.constants import MARKER_END, MARKER_START


@dataclass
class Envelope:
    """A schema file split around its markers."""

    before: str
    body: str
    after: str


def split_envelope(content: str) -> Envelope | None:
    """Locate both markers. Returns None unless both are present."""
    start = content.find(MARKER_START)
    end = content.find(MARKER_END)
    if start == -1 or end == -1:
        return None

    return Envelope(
        before=content[:start],
        body=content[start + len(MARKER_START) : end].strip(),
        after=content[end + len(MARKER_END) :],
    )


def unwrap(content: str) -> str:
    """The JSON text of a schema file, with or without markers."""
    envelope = split_envelope(content)
    return envelope.body if envelope is not None else content


def wrap(body: str, existing: str | None = None) -> str:
    """
    Place ``body`` between the markers.

    Text outside the markers of ``existing`` is reproduced byte for byte. When
    ``existing`` has no markers, only the new region is written.
    """
    region = f"{MARKER_START}\n{body}\n{MARKER_END}"
    envelope = split_envelope(existing) if existing is not None else None
    if envelope is None:
        return region + "\n"
    return envelope.before + region + envelope.after
