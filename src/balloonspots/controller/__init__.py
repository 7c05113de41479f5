from balloonspots.controller.scheduler import ScheduledTask, Scheduler
from balloonspots.controller.screen import BalloonScreen, Phase

__all__ = ["ScheduledTask", "Scheduler", "BalloonScreen", "Phase"]
