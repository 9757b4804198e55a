"""Video geometry and aspect classification value objects."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Inclusive ratio bands, centred on 16:9 and 9:16.
LANDSCAPE_BAND = (1.76, 1.78)
PORTRAIT_BAND = (0.55, 0.57)


class AspectClass(str, Enum):
    """Coarse orientation bucket used as the object key prefix."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    OTHER = "other"


def classify_ratio(ratio: float) -> AspectClass:
    """Classify a width/height ratio into an aspect bucket.

    Args:
        ratio: Width divided by height.

    Returns:
        LANDSCAPE or PORTRAIT inside their bands, OTHER everywhere else.
    """
    if LANDSCAPE_BAND[0] <= ratio <= LANDSCAPE_BAND[1]:
        return AspectClass.LANDSCAPE
    if PORTRAIT_BAND[0] <= ratio <= PORTRAIT_BAND[1]:
        return AspectClass.PORTRAIT
    return AspectClass.OTHER


class VideoGeometry(BaseModel):
    """Pixel dimensions of the primary video stream.

    Either dimension may be ``None`` when the probe reported no usable
    stream. Unknown geometry always classifies as OTHER and never yields a
    ratio.

    Examples:
        >>> VideoGeometry(width=1920, height=1080).classify()
        <AspectClass.LANDSCAPE: 'landscape'>

        >>> VideoGeometry.unknown().known
        False
    """

    model_config = ConfigDict(frozen=True)

    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)

    @classmethod
    def unknown(cls) -> "VideoGeometry":
        """Geometry for a file whose probe reported nothing usable."""
        return cls()

    @property
    def known(self) -> bool:
        """Whether both dimensions are present and positive."""
        return bool(self.width) and bool(self.height)

    @property
    def ratio(self) -> float | None:
        """Width over height, or None when the geometry is unknown."""
        if not self.known:
            return None
        return self.width / self.height  # type: ignore[operator]

    def classify(self) -> AspectClass:
        """Classify this geometry into an aspect bucket."""
        ratio = self.ratio
        if ratio is None:
            return AspectClass.OTHER
        return classify_ratio(ratio)
