"""Qt session runtime: tick loop, AI sessions and matches."""

from tempochess.driver.ai_session import AISession
from tempochess.driver.match import MatchSession
from tempochess.driver.tick_loop import TickLoop

__all__ = ["AISession", "MatchSession", "TickLoop"]
