"""Goal-mouth diagrams of penalty kick strategies."""

BAR_BLOCKS = 10


def probability_bar(probability: float, blocks: int = BAR_BLOCKS) -> str:
    """Bar of `blocks` cells, filled in proportion to `probability`."""
    filled = min(blocks, max(0, round(probability * blocks)))
    return "[" + "█" * filled + "░" * (blocks - filled) + "]"


class GoalVisualizer:
    """Renders a goal split into Left / Center / Right with a mix overlaid.

    Args:
        width: Total width of the goal frame in characters
    """

    def __init__(self, width: int = 60):
        self.width = width

    def render_kicker_strategy(self, left: float, center: float, right: float) -> str:
        return self._render("KICKER STRATEGY", left, center, right)

    def render_goalkeeper_strategy(self, left: float, center: float, right: float) -> str:
        return self._render("GOALKEEPER STRATEGY", left, center, right)

    def _render(self, title: str, left: float, center: float, right: float) -> str:
        section = (self.width - 4) // 3
        inner = 3 * section + 2
        probabilities = (left, center, right)

        def row(cells) -> str:
            return "    ║" + "║".join(f"{cell:^{section}}" for cell in cells) + "║"

        bar = "═" * section
        lines = [
            "",
            f"    {title:^{self.width}}",
            f"    ╔{bar}╦{bar}╦{bar}╗",
            row(("LEFT", "CENTER", "RIGHT")),
            row(probability_bar(p) for p in probabilities),
            row(f"{p * 100:.1f}%" for p in probabilities),
            row(("", "", "")),
            f"    ╠{bar}╩{bar}╩{bar}╣",
            f"    ║{'⚽ GOAL ⚽':^{inner}}║",
            f"    ╚{'═' * inner}╝",
            "",
        ]
        return "\n".join(lines)


def render_pitch() -> str:
    """Static diagram of the penalty situation."""
    return "\n".join(
        [
            "",
            "                    ┌─────────────────────────────┐",
            "                    │           GOAL              │",
            "                    └─────────────────────────────┘",
            "                           ┌───────────┐",
            "                           │  PENALTY  │",
            "                           │    BOX    │",
            "                           └───────────┘",
            "",
            "                                ⚽",
            "",
            "                              KICKER",
            "",
        ]
    )
