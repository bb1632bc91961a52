"""Base classes and constants for segmentation engines."""

from abc import ABC, abstractmethod


# Myanmar Unicode Constants
CONSONANT_FIRST = 0x1000  # က
CONSONANT_LAST = 0x1021  # အ
DIGIT_FIRST = 0x1040  # ၀
DIGIT_LAST = 0x1049  # ၉
STACKING_MARK = "\N{MYANMAR SIGN VIRAMA}"  # stacks the next consonant
VIRAMA = "\N{MYANMAR SIGN ASAT}"
VISARGA = "\N{MYANMAR SIGN DOT BELOW}"

# Independent vowels, great sa, section marks, digits and punctuation
OTHER_BREAK_CODEPOINTS = frozenset(
    [0x1023, 0x1024, 0x1025, 0x1026, 0x1027, 0x1029, 0x102A, 0x103F]
    + [0x104A, 0x104B, 0x104C, 0x104D, 0x104E, 0x104F]
    + list(range(DIGIT_FIRST, DIGIT_LAST + 1))
)

# ASCII punctuation that starts a new unit; other punctuation (. , ? " etc.)
# stays attached to the unit before it
ASCII_BREAK_PUNCTUATION = frozenset("!-/:@[`{~")

# Invisible marks removed before segmentation
ZERO_WIDTH_SPACE = "\N{ZERO WIDTH SPACE}"
ZERO_WIDTH_NON_JOINER = "\N{ZERO WIDTH NON-JOINER}"
ZERO_WIDTH_JOINER = "\N{ZERO WIDTH JOINER}"

# Myanmar, Myanmar Extended-A
MYANMAR_RANGES = (
    (0x1000, 0x109F),
    (0xAA60, 0xAA7F),
)


class SegmentationEngine(ABC):
    """Base class for segmentation engines."""

    name = "base"

    @abstractmethod
    def segment(self, text: str) -> list[str]:
        """Segment text into an ordered list of non-empty units.

        Args:
            text: Raw input text (a single line)

        Returns:
            List of unit strings
        """
        pass

    def segment_batch(self, texts: list[str]) -> list[list[str]]:
        """Segment several lines, preserving their order."""
        return [self.segment(text) for text in texts]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
