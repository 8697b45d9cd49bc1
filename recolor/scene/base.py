"""
Abstract scene boundary. The host design tool (or a document stand-in) implements
this; the recoloring engine only talks to scenes through it.
"""
from abc import ABC, abstractmethod

from .schema import Frame, Layer, Paint


class Scene(ABC):
    """
    Host capability used by the orchestrator:
    - enumerate and look up layers under an explicitly named frame,
    - render a frame to JPEG bytes for the palette service,
    - read/write a layer's fills and strokes (copies in, copies out),
    - create swatch rectangles on the page.
    """

    @abstractmethod
    def get_frame(self, name: str) -> Frame | None:
        """Frame with the given name, or None."""
        ...

    @abstractmethod
    def list_layers(self, frame: Frame) -> list[dict[str, str]]:
        """[{"name": ...}] for every layer under the frame."""
        ...

    @abstractmethod
    def find_layer_by_name(self, frame: Frame, name: str) -> Layer | None:
        """
        Layer under the frame with this name, or None.
        Raises DuplicateName if several match and the scene's policy forbids picking one.
        """
        ...

    @abstractmethod
    def render_frame_as_image(self, frame: Frame) -> bytes:
        """JPEG bytes of the rendered frame."""
        ...

    @abstractmethod
    def get_paints(self, layer: Layer) -> list[Paint] | None:
        """Copy of the layer's fills (None if the layer has no fills property)."""
        ...

    @abstractmethod
    def set_paints(self, layer: Layer, paints: list[Paint]) -> None:
        ...

    @abstractmethod
    def get_strokes(self, layer: Layer) -> list[Paint] | None:
        ...

    @abstractmethod
    def set_strokes(self, layer: Layer, strokes: list[Paint]) -> None:
        ...

    @abstractmethod
    def create_rectangle(
        self,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        fills: list[Paint],
    ) -> Layer:
        """Create a rectangle on the page (outside any frame) and return it."""
        ...
