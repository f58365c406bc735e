"""Owner of the single active session."""
from __future__ import annotations

from typing import Callable, Optional
from urllib.parse import urlencode

from physlab.data.scenarios import DEFAULT_SCENARIO_KIND, ParameterSet, ScenarioKind

from .config import SIM_CFG, SimCfg
from .logging_utils import RunLogger
from .session import FrameListener, SimulationSession
from .timekeeping import Scheduler

LoggerFactory = Callable[[ParameterSet], Optional[RunLogger]]


class SessionController:
    """Keeps exactly one session alive and rebuilds it on every change.

    Switching scenario or changing a parameter closes the current session
    (cancelling its pending tick) before the replacement is started.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        cfg: SimCfg = SIM_CFG,
        on_frame: Optional[FrameListener] = None,
        logger_factory: Optional[LoggerFactory] = None,
    ) -> None:
        self._scheduler = scheduler
        self._cfg = cfg
        self._on_frame = on_frame
        self._logger_factory = logger_factory
        self._logger: Optional[RunLogger] = None
        self._session: Optional[SimulationSession] = None

    @property
    def session(self) -> Optional[SimulationSession]:
        return self._session

    @property
    def parameters(self) -> ParameterSet:
        if self._session is None:
            return ParameterSet.defaults(DEFAULT_SCENARIO_KIND)
        return self._session.parameters

    # ------------------------------------------------------------------
    def select(self, kind: str | ScenarioKind) -> SimulationSession:
        """Switch scenario, starting from its preset values."""

        return self.load(ParameterSet.defaults(kind))

    def load(self, params: ParameterSet) -> SimulationSession:
        self.shutdown()
        if self._logger_factory is not None:
            self._logger = self._logger_factory(params)
            if self._logger is not None:
                self._logger.write_meta(
                    {
                        "scenario": params.kind.value,
                        "params": dict(params.values),
                        "dt": self._cfg.dt,
                        "arena": list(self._cfg.arena_size),
                    }
                )
        self._session = SimulationSession(
            params,
            self._scheduler,
            cfg=self._cfg,
            on_frame=self._on_frame,
            logger=self._logger,
        )
        self._session.start()
        return self._session

    def update_parameters(self, **values: float) -> SimulationSession:
        return self.load(self.parameters.replace(**values))

    def nudge(self, name: str, steps: int) -> SimulationSession:
        return self.load(self.parameters.nudge(name, steps))

    # ------------------------------------------------------------------
    def toggle_pause(self) -> bool:
        """Pause or resume the active session; returns whether it now runs."""

        session = self._require_session()
        if session.running:
            session.pause()
        else:
            session.start()
        return session.running

    def reset(self) -> None:
        self._require_session().reset()

    def handoff_query(self) -> str:
        """Query string for the chart view, e.g. ``sim=spring&k=50&...``."""

        return urlencode(self.parameters.to_query())

    def shutdown(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
        if self._logger is not None:
            self._logger.close()
            self._logger = None

    def _require_session(self) -> SimulationSession:
        if self._session is None:
            raise RuntimeError("No active session")
        return self._session


__all__ = ["LoggerFactory", "SessionController"]
