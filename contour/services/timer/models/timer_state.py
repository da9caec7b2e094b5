"""Timer state models"""
from enum import Enum
from pydantic import BaseModel, ConfigDict


class TimerPhase(str, Enum):
    """Countdown lifecycle phase"""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


class TimerState(BaseModel):
    """Countdown snapshot nested in the timer module payload"""
    model_config = ConfigDict(frozen=True)

    total_seconds: int
    remaining_seconds: int
    is_running: bool = False
    is_complete: bool = False
    label: str = ""
    display: str = "00:00"
    progress: float = 1.0  # remaining / total, 1 -> 0 while running
