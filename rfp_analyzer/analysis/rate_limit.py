import time
from collections.abc import Callable

from rfp_analyzer.logging.logger import Log


class RateLimitPolicy:
    """Fixed pacing between consecutive provider calls on one API key.

    ``requests_per_minute`` is turned into a pause of ``60 / rpm`` seconds;
    the default of 60 gives the one-second gap between analysis chunks.
    """

    def __init__(
        self,
        requests_per_minute: int = 60,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if requests_per_minute < 1:
            raise ValueError(
                f"requests_per_minute must be positive, got {requests_per_minute}"
            )
        self._requests_per_minute = requests_per_minute
        self._sleep = sleep

    @property
    def requests_per_minute(self) -> int:
        return self._requests_per_minute

    @property
    def interval_seconds(self) -> float:
        return 60.0 / self._requests_per_minute

    def wait(self) -> None:
        """Block for one pacing interval."""
        Log.debug("Pacing LLM requests", seconds=self.interval_seconds)
        self._sleep(self.interval_seconds)
