"""
Showing Agent - Proposes a viewing slot for a property.
"""

from .base_agent import BaseAgent
from ..models.schemas import SetupShowingParams, ShowingResult, ShowingSchedule
from ..models.state import AssistantState, ToolName

AVAILABLE_SLOTS = [
    "Tomorrow at 2:00 PM",
    "Tomorrow at 4:00 PM",
    "Wednesday at 10:00 AM",
    "Wednesday at 3:00 PM",
    "Thursday at 1:00 PM",
    "Friday at 11:00 AM",
]

SHOWING_DURATION = "45 minutes"
SHOWING_NOTES = "Please bring photo ID and be prepared to discuss financing options."


class ShowingAgent(BaseAgent):
    """Schedules a showing from a fixed list of open slots."""

    tool = ToolName.SETUP_SHOWING

    def run(self, params: SetupShowingParams, state: AssistantState) -> ShowingResult:
        params = params or SetupShowingParams()
        client = self.client(state)
        broker = self.broker(state)

        property_id = params.property_id
        if not property_id:
            selected = self.selected_ids(state)
            property_id = selected[0] if selected else None

        return ShowingResult(
            showing=ShowingSchedule(
                available_slots=list(AVAILABLE_SLOTS),
                preferred_time=self._pick_slot(params.preferred_time),
                duration=SHOWING_DURATION,
                meeting_location="Property location",
                contact_info=client.phone or client.email,
                notes=SHOWING_NOTES,
                property_id=property_id,
            ),
            client_name=client.name,
            broker_name=broker.name,
        )

    def _pick_slot(self, requested) -> str:
        """Honor a requested slot if it is open, otherwise pick one at random."""
        if requested:
            for slot in AVAILABLE_SLOTS:
                if slot.lower() == requested.strip().lower():
                    return slot
        return self.rng.choice(AVAILABLE_SLOTS)
