from collections.abc import Iterable

import chardet

# Guesses below this confidence are treated as failed detections.
MIN_CONFIDENCE = 0.2


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    Args:
        file: The file to detect the encoding of, as an iterable of byte lines.

    Returns:
        The lowercased encoding if detected successfully, otherwise None.
        Detection fails if the file is empty or the detector is not confident enough.
    """

    detector = chardet.UniversalDetector()
    fed = False

    for line in file:
        if detector.done:
            break

        if line:
            detector.feed(line)
            fed = True

    result = detector.close()

    if not fed or (result["confidence"] or 0) < MIN_CONFIDENCE:
        return None

    if encoding := result["encoding"]:
        return encoding.lower()

    return None
