"""
Error kinds for recoloring runs. Each carries a stable kind string and a context
dict so the orchestrator can report failures as structured results.
"""
from typing import Any


class RecolorError(Exception):
    """Base error: kind + message + context."""

    kind = "RecolorError"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "context": dict(self.context)}


class InvalidFormat(RecolorError):
    """Malformed color value (e.g. hex string that is not 6 hex digits)."""

    kind = "InvalidFormat"


class PaletteUnavailable(RecolorError):
    """Palette service failed or returned an empty/malformed palette."""

    kind = "PaletteUnavailable"


class AssignmentUnavailable(RecolorError):
    """Assignment service failed or returned a malformed mapping."""

    kind = "AssignmentUnavailable"


class LayerNotFound(RecolorError):
    kind = "LayerNotFound"


class DuplicateName(RecolorError):
    """More than one layer matches a name and the lookup policy forbids guessing."""

    kind = "DuplicateName"


class UnsupportedPaintKind(RecolorError):
    kind = "UnsupportedPaintKind"


class FrameNotFound(RecolorError):
    kind = "FrameNotFound"


class Cancelled(RecolorError):
    """Run was cancelled (shutdown requested) before any layer was mutated."""

    kind = "Cancelled"
