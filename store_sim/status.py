"""
Per-minute lane status snapshots and their text rendering.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

BORDER = "+-----------------+------------+----------------------+"

ACTION_MESSAGES = {
    "joined": "Customer #{customer} has joined the line.",
    "completed": "Customer #{customer} has finished checking out.",
    "worker_assigned": "Customer #{customer} has an issue. A worker has been assigned.",
    "stalled": "Customer #{customer} has an issue. No workers are available.",
    "in_service": "Customer #{customer} is at the self-checkout.",
}


@dataclass(frozen=True)
class LaneSnapshot:
    """What one lane looks like at the end of a minute."""
    lane: int
    state: str
    queue_length: int
    customer_number: Optional[int] = None
    remaining_time: Optional[float] = None  # math.inf while stalled
    actions: Tuple[Tuple[str, int], ...] = ()  # (event_type, customer_number) in order this minute

    @property
    def occupied(self) -> bool:
        return self.customer_number is not None

    @property
    def stalled(self) -> bool:
        return self.remaining_time is not None and math.isinf(self.remaining_time)

    @property
    def action(self) -> Optional[str]:
        """Last thing that happened at this lane this minute."""
        if not self.actions:
            return None
        return self.actions[-1][0]

    def action_types(self) -> List[str]:
        return [event_type for event_type, _ in self.actions]


def _remaining_label(snapshot: LaneSnapshot) -> str:
    if snapshot.stalled:
        return "waiting for worker"
    if snapshot.remaining_time is None:
        return "-"
    return f"{snapshot.remaining_time:.2f} min left"


def render_status(minute: int, snapshots: Sequence[LaneSnapshot]) -> str:
    """Render every lane's actions and status as a block of text tables."""
    lines: List[str] = [f"Minute {minute}:", ""]
    for snap in snapshots:
        for event_type, customer in snap.actions:
            message = ACTION_MESSAGES[event_type].format(customer=customer)
            lines.append(f"Checkout #{snap.lane + 1}: {message}")
    lines.append("")

    for snap in snapshots:
        lines.append(
            f"Status of Checkout #{snap.lane + 1}: {'OCCUPIED' if snap.occupied else 'EMPTY'}"
        )
        lines.append(BORDER)
        if snap.occupied:
            waiting = max(snap.queue_length - 1, 0)
            lines.append(
                f"| Customer #{snap.customer_number:<5} | {waiting:>3} behind | "
                f"{_remaining_label(snap):<20} |"
            )
        lines.append(BORDER)
        lines.append("")
    return "\n".join(lines)
