"""Aspect ratio schema."""

from enum import StrEnum


class AspectRatio(StrEnum):
    """Output aspect ratios a clip can be rendered at."""

    RATIO_3_2 = "3:2"
    RATIO_4_3 = "4:3"
    RATIO_5_4 = "5:4"
    PORTRAIT_9_16 = "9:16"
    RATIO_16_10 = "16:10"
    STANDARD_16_9 = "16:9"
    ULTRAWIDE_21_9 = "21:9"
    CINEMATIC_2_35 = "2.35:1"
    CINEMA_1_85 = "1.85:1"

    @property
    def label(self) -> str:
        """Return the label shown in the ratio picker."""
        suffix = _LABEL_SUFFIXES.get(self)
        if suffix is None:
            return self.value
        return f"{self.value} ({suffix})"


_LABEL_SUFFIXES = {
    AspectRatio.PORTRAIT_9_16: "Portrait",
    AspectRatio.STANDARD_16_9: "Standard",
    AspectRatio.ULTRAWIDE_21_9: "Ultrawide",
    AspectRatio.CINEMATIC_2_35: "Cinematic",
    AspectRatio.CINEMA_1_85: "Cinema",
}

DEFAULT_ASPECT_RATIO = AspectRatio.STANDARD_16_9
