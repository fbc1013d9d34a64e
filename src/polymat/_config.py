"""
polymat Config - Behaviour Configuration System

Provides property-based configuration for matrix construction and arithmetic.
Allows fine-grained control over behaviour without modifying function
signatures.

Example:
    >>> import polymat
    >>> polymat.config.compute.tolerance = 1e-12
    >>>
    >>> with polymat.config.local(layout=LayoutConfig(default_read_order=ReadOrder.COL_MAJOR)):
    ...     m = DenseMatrix.zeros(2, 2)   # column-major storage
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger("polymat.config")


# =============================================================================
# Enumerations
# =============================================================================

class ReadOrder(Enum):
    """
    How logical (row, col) coordinates map onto backing storage.

    Toggling the read order is how Dense and Sparse matrices transpose in O(1).
    """
    ROW_MAJOR = 'row_major'
    COL_MAJOR = 'col_major'

    def flipped(self) -> "ReadOrder":
        """The other read order."""
        if self is ReadOrder.ROW_MAJOR:
            return ReadOrder.COL_MAJOR
        return ReadOrder.ROW_MAJOR


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class LayoutConfig:
    """Configuration for storage layout of new matrices."""
    default_read_order: ReadOrder = ReadOrder.ROW_MAJOR


@dataclass
class ComputeConfig:
    """Configuration for compute operations."""
    tolerance: float = 0.0         # Absolute tolerance for inexact dtypes
    prune_zeros: bool = True       # Drop exact zeros from sparse results


@dataclass
class MaterializeConfig:
    """Configuration for materialization of structural and sparse matrices."""
    warn_threshold: int = 1_000_000  # Warn when elements() exceeds this size


# =============================================================================
# Global Configuration Manager
# =============================================================================

class PolymatConfig:
    """
    Global configuration manager for polymat.

    Provides thread-local configuration with context manager support.
    Configuration can be set globally or locally within a context.

    Example:
        # Global configuration
        polymat.config.compute.prune_zeros = False

        # Local configuration (context manager)
        with polymat.config.local(compute=ComputeConfig(tolerance=1e-9)):
            assert q.is_orthogonal()
        # Back to global config
    """

    _SECTIONS = ("layout", "compute", "materialize")

    def __init__(self):
        self._global_layout = LayoutConfig()
        self._global_compute = ComputeConfig()
        self._global_materialize = MaterializeConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        self._callbacks: Dict[str, List[Callable]] = {
            name: [] for name in self._SECTIONS
        }

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def layout(self) -> LayoutConfig:
        """Get layout configuration."""
        local = getattr(self._local, "layout", None)
        return local if local is not None else self._global_layout

    @layout.setter
    def layout(self, value: LayoutConfig):
        """Set global layout configuration."""
        self._global_layout = value
        self._notify("layout", value)

    @property
    def compute(self) -> ComputeConfig:
        """Get compute configuration."""
        local = getattr(self._local, "compute", None)
        return local if local is not None else self._global_compute

    @compute.setter
    def compute(self, value: ComputeConfig):
        """Set global compute configuration."""
        self._global_compute = value
        self._notify("compute", value)

    @property
    def materialize(self) -> MaterializeConfig:
        """Get materialize configuration."""
        local = getattr(self._local, "materialize", None)
        return local if local is not None else self._global_materialize

    @materialize.setter
    def materialize(self, value: MaterializeConfig):
        """Set global materialize configuration."""
        self._global_materialize = value
        self._notify("materialize", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def default_read_order(self) -> ReadOrder:
        """Read order given to new Dense/Sparse matrices."""
        return self.layout.default_read_order

    @default_read_order.setter
    def default_read_order(self, value: ReadOrder):
        self._global_layout.default_read_order = ReadOrder(value)

    @property
    def tolerance(self) -> float:
        """Absolute tolerance used by inexact predicate checks."""
        return self.compute.tolerance

    @tolerance.setter
    def tolerance(self, value: float):
        if value < 0:
            raise ValueError(f"tolerance must be non-negative, got {value}")
        self._global_compute.tolerance = float(value)

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (layout, compute, materialize)

        Returns:
            Context manager

        Raises:
            KeyError: If a keyword is not a configuration section
        """
        for key in kwargs:
            if key not in self._SECTIONS:
                raise KeyError(f"Unknown config section: {key}. Valid: {self._SECTIONS}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        """Set thread-local configuration."""
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _get_local(self, keys: List[str]) -> Dict[str, Any]:
        """Snapshot thread-local overrides (None where unset)."""
        return {key: getattr(self._local, key, None) for key in keys}

    def _restore_local(self, saved: Dict[str, Any]):
        """Put back overrides captured by _get_local."""
        for key, value in saved.items():
            setattr(self._local, key, value)

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Name of config ("layout", "compute", "materialize")
            callback: Function to call with the new section when it is replaced
        """
        if config_name not in self._callbacks:
            raise KeyError(f"Unknown config section: {config_name}")
        self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        """Notify callbacks of configuration change."""
        for callback in self._callbacks.get(config_name, []):
            try:
                callback(value)
            except Exception:
                logger.exception("config callback for %r failed", config_name)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults, dropping local overrides in this thread."""
        for key in self._SECTIONS:
            setattr(self._local, key, None)
        self._global_layout = LayoutConfig()
        self._global_compute = ComputeConfig()
        self._global_materialize = MaterializeConfig()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "layout": {
                "default_read_order": self.layout.default_read_order.name,
            },
            "compute": {
                "tolerance": self.compute.tolerance,
                "prune_zeros": self.compute.prune_zeros,
            },
            "materialize": {
                "warn_threshold": self.materialize.warn_threshold,
            },
        }

    def __repr__(self) -> str:
        return f"PolymatConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: PolymatConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._saved: Dict[str, Any] = {}

    def __enter__(self):
        # Restored on exit so nested contexts unwind to the enclosing override
        self._saved = self._config._get_local(list(self._kwargs))
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._restore_local(self._saved)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = PolymatConfig()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_config() -> PolymatConfig:
    """Get the global configuration instance."""
    return config


def set_default_read_order(read_order: ReadOrder = ReadOrder.ROW_MAJOR):
    """Set the read order given to newly built Dense/Sparse matrices."""
    config.layout = LayoutConfig(default_read_order=ReadOrder(read_order))


def set_tolerance(tolerance: float = 0.0):
    """Set the absolute tolerance used for inexact dtypes."""
    config.tolerance = tolerance


__all__ = [
    "ReadOrder",
    "LayoutConfig",
    "ComputeConfig",
    "MaterializeConfig",
    "PolymatConfig",
    "config",
    "get_config",
    "set_default_read_order",
    "set_tolerance",
]
