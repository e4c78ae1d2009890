"""
Annotation narrator.

Purpose: Turn frame annotations into human-readable log lines and keep a
    bounded, newest-first log for the HUD and terminal playback.

Inputs:
    - Annotation from a Frame (or None)

Outputs:
    - Message string per annotation
    - Rolling list of recent lines

Params:
    max_lines: int - number of lines kept in the log
"""

from typing import List, Optional

from nav.frames import Annotation, AnnotationKind, Direction, RejectReason


DIRECTION_ARROWS = {
    Direction.UP: "⬆️",
    Direction.RIGHT: "➡️",
    Direction.DOWN: "⬇️",
    Direction.LEFT: "⬅️",
}

# Plain labels for fonts without emoji glyphs (pygame HUD)
DIRECTION_LABELS = {
    Direction.UP: "[up]",
    Direction.RIGHT: "[right]",
    Direction.DOWN: "[down]",
    Direction.LEFT: "[left]",
}

REJECT_MESSAGES = {
    RejectReason.OUT_OF_BOUNDS: "Oh, this is out of the maze! 🚫",
    RejectReason.WALL: "It's a Wall! 🚫",
    RejectReason.ALREADY_VISITED: "Already seen 👣",
}

START_MESSAGE = "Let's start! 🚀"
ACCEPT_MESSAGE = "Good path! ✅ Moving forward..."
END_MESSAGE = "You made it to the end! 🏆"
BACKTRACK_MESSAGE = "⚠️ Going back! ⛔ ¯\\_(ツ)_/¯"
CELEBRATION = "🎉🎉🎉🎉🎉"
NO_SOLUTION = "No way out of this maze 😞"


def describe(annotation: Optional[Annotation], emoji: bool = True) -> Optional[str]:
    """
    Describe an annotation.

    Args:
        annotation: Frame annotation; progress frames have none
        emoji: Use emoji arrows (terminal) or plain labels (HUD)

    Returns:
        Message string, or None for progress frames
    """
    if annotation is None:
        return None

    if annotation.kind == AnnotationKind.BACKTRACKED:
        message = BACKTRACK_MESSAGE
    elif annotation.kind == AnnotationKind.STARTED:
        message = START_MESSAGE
    else:
        if annotation.kind == AnnotationKind.REJECTED:
            body = REJECT_MESSAGES[annotation.reason]
        elif annotation.kind == AnnotationKind.REACHED_END:
            body = END_MESSAGE
        else:
            body = ACCEPT_MESSAGE

        arrows = DIRECTION_ARROWS if emoji else DIRECTION_LABELS
        prefix = arrows.get(annotation.direction, "⚠️" if emoji else "[?]")
        message = f"{prefix} {body}"

    if not emoji:
        message = message.encode("ascii", "ignore").decode().strip()
    return message


def completion_message(solved: bool) -> str:
    """Final line once playback has run out of frames."""
    return CELEBRATION if solved else NO_SOLUTION


class AnnotationLog:
    """Newest-first rolling log of annotation lines."""

    def __init__(self, max_lines: int = 12, emoji: bool = True):
        self.max_lines = max_lines
        self.emoji = emoji
        self.lines: List[str] = []

    def record(self, annotation: Optional[Annotation]) -> Optional[str]:
        """Add the line for an annotation; returns it (None for progress frames)."""
        line = describe(annotation, emoji=self.emoji)
        if line is not None:
            self.push(line)
        return line

    def push(self, line: str):
        self.lines.insert(0, line)
        del self.lines[self.max_lines:]

    def clear(self):
        self.lines = []
