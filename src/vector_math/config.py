"""Runtime configuration and Taichi initialization.

All geometry in this package is computed in double precision. Taichi has
to be initialized with ``default_fp=ti.f64`` so that float literals inside
kernels match the ``ti.f64`` vector and struct types; ``init`` takes care
of that.

Configuration can be given explicitly or read from the environment:

    VECTOR_MATH_ARCH    Backend name: cpu (default), gpu, cuda, vulkan, metal.
    VECTOR_MATH_DEBUG   Enable Taichi debug mode when set to 1/true/yes.
    VECTOR_MATH_SEED    Random seed passed to ti.init (default 0).

Example:
    >>> from vector_math.config import RuntimeConfig, init
    >>> init(RuntimeConfig(arch="cpu"))
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import taichi as ti

logger = logging.getLogger(__name__)

# Tolerance for the ray/triangle determinant and barycentric bounds
EPSILON = 1e-5

# Initial slab interval for ray/box tests
INFINITY = float("inf")

_ARCHS = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
    "cuda": ti.cuda,
    "vulkan": ti.vulkan,
    "metal": ti.metal,
}

_TRUTHY = ("1", "true", "yes", "on")

_initialized = False


@dataclass
class RuntimeConfig:
    """Configuration for the Taichi runtime.

    Attributes:
        arch: Backend name, one of cpu, gpu, cuda, vulkan, metal.
        debug: Run kernels in Taichi debug mode (bounds checks, asserts).
        random_seed: Seed for Taichi's random number generator.
    """

    arch: str = "cpu"
    debug: bool = False
    random_seed: int = 0

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Build a configuration from VECTOR_MATH_* environment variables."""
        arch = os.environ.get("VECTOR_MATH_ARCH", "cpu").strip().lower()
        debug = os.environ.get("VECTOR_MATH_DEBUG", "").strip().lower() in _TRUTHY
        seed_text = os.environ.get("VECTOR_MATH_SEED", "0").strip()
        try:
            seed = int(seed_text)
        except ValueError as exc:
            raise ValueError(f"VECTOR_MATH_SEED must be an integer, got {seed_text!r}") from exc
        return cls(arch=arch, debug=debug, random_seed=seed)


def resolve_arch(name: str):
    """Map a backend name to the Taichi arch constant.

    Raises:
        ValueError: If the name is not a known backend.
    """
    try:
        return _ARCHS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown Taichi arch {name!r}. Expected one of: {', '.join(sorted(_ARCHS))}"
        ) from None


def is_initialized() -> bool:
    """Check whether a Taichi program is currently running."""
    return _initialized


def init(config: Optional[RuntimeConfig] = None) -> RuntimeConfig:
    """Initialize Taichi for double precision geometry.

    Args:
        config: Runtime configuration. Read from the environment if omitted.

    Returns:
        The configuration that was applied.
    """
    global _initialized

    if config is None:
        config = RuntimeConfig.from_env()
    arch = resolve_arch(config.arch)
    ti.init(
        arch=arch,
        default_fp=ti.f64,
        debug=config.debug,
        random_seed=config.random_seed,
    )
    _initialized = True
    logger.info("Taichi initialized (arch=%s, debug=%s)", config.arch, config.debug)
    return config


def ensure_initialized() -> None:
    """Initialize Taichi from the environment unless already running."""
    if not is_initialized():
        init()
