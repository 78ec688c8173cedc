# qregsim/config.py
"""
Configuration for the state-vector simulator.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import numpy as np

BACKENDS = ("serial", "numba")


@dataclass(frozen=True)
class SimulatorConfig:
    """Knobs shared by the executor, the engines and the measurement unit."""

    # Engine selection
    backend: str = "serial"
    num_threads: Optional[int] = None  # numba only; None keeps numba's default

    # Amplitude precision: complex64 (single) or complex128 (double)
    dtype: type = np.complex128

    # Tolerances
    norm_tol: float = 1e-9   # |1 - ||psi||^2| allowed by check_normalized
    zero_tol: float = 1e-12  # branch norms at or below this are degenerate
    check_norm: bool = False  # Executor.run verifies normalization at the end

    # Measurement
    seed: Optional[int] = None  # seed of the default random source

    @classmethod
    def from_env(cls, environ=None) -> "SimulatorConfig":
        """Read QREGSIM_BACKEND, QREGSIM_NUM_THREADS and QREGSIM_SEED."""
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("QREGSIM_BACKEND"):
            kwargs["backend"] = env["QREGSIM_BACKEND"]
        if env.get("QREGSIM_NUM_THREADS"):
            kwargs["num_threads"] = int(env["QREGSIM_NUM_THREADS"])
        if env.get("QREGSIM_SEED"):
            kwargs["seed"] = int(env["QREGSIM_SEED"])
        return cls(**kwargs)


# Default configuration instance
DEFAULT_CONFIG = SimulatorConfig()
