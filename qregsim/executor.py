# qregsim/executor.py
from typing import Iterable, Tuple

import numpy as np

from .config import DEFAULT_CONFIG, SimulatorConfig
from .gates import Gate
from .logging_config import get_logger
from .measure import measure
from .state import State

logger = get_logger(__name__)


class Executor:
    """Threads a State through gates and measurements on one backend.

    Holds no register of its own: every call takes the current State and
    returns its replacement.
    """

    def __init__(self, config: SimulatorConfig = DEFAULT_CONFIG):
        self.config = config
        if config.backend == "serial":
            from . import apply_serial as backend
        elif config.backend == "numba":
            try:
                from . import apply_numba as backend
            except ImportError as e:
                raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
            if config.num_threads is not None:
                backend.set_threads(int(config.num_threads))
        else:
            raise NotImplementedError(f"Unknown backend: {config.backend}")
        self._apply = backend.apply
        # seeded once; every measure call draws the next value
        self._rng = np.random.default_rng(config.seed)

    def register(self, amplitudes) -> State:
        return State.from_amplitudes(amplitudes, dtype=self.config.dtype)

    def zero(self, n: int) -> State:
        return State.zero(n, dtype=self.config.dtype)

    def apply(self, state: State, gate: Gate) -> State:
        return self._apply(state, gate)

    def run(self, state: State, gates: Iterable[Gate]) -> State:
        count = 0
        for gate in gates:
            state = self._apply(state, gate)
            count += 1
        logger.debug("ran %d gates on %s backend", count, self.config.backend)
        if self.config.check_norm:
            state.check_normalized(tol=self.config.norm_tol)
        return state

    def measure(self, state: State, qubit: int, rng=None) -> Tuple[bool, State]:
        return measure(state, qubit, rng=self._rng if rng is None else rng, config=self.config)
