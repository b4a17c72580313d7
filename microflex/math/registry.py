"""
Kernel Registry
===============
Auto-discovers kernels from YAML configs in kernel_configs/.
Each YAML declares: arity, default parameters, metadata.
Each kernel has a matching .py file in kernels/ with a compute() function.

Usage:
    from microflex.math.registry import get_kernel, get_registry

    xor = get_kernel('bitwise_xor')          # BinaryKernel
    shl = get_kernel('left_shift', n=3)      # UnaryKernel, n bound
    get_registry().names(arity='unary')
"""

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from microflex.math.contract import (
    BinaryKernel,
    FunctionKernel,
    FunctionUnaryKernel,
    UnaryKernel,
)
from microflex.util.validation import require

logger = logging.getLogger(__name__)

ARITIES = ('binary', 'unary')


@dataclass
class KernelSpec:
    """Kernel specification from YAML config."""
    name: str
    version: str
    arity: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    category: str = 'unknown'
    description: str = ''
    symbol: Optional[str] = None


class Registry:
    """
    Kernel registry. Discovers kernels from YAML configs.
    Lazily imports compute functions on first use.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(__file__).parent / 'kernel_configs'
        self._specs: Dict[str, KernelSpec] = {}
        self._compute_cache: Dict[str, Callable] = {}
        self._discover()

    def _discover(self):
        """Scan kernel_configs/ for YAML files. Malformed files are skipped."""
        if not self._config_dir.exists():
            logger.warning(f"Kernel config directory not found: {self._config_dir}")
            return
        for path in sorted(self._config_dir.glob('*.yaml')):
            with open(path) as f:
                cfg = yaml.safe_load(f)
            if not isinstance(cfg, dict) or cfg.get('arity') not in ARITIES:
                logger.warning(f"Skipping malformed kernel config: {path.name}")
                continue
            meta = cfg.get('metadata') or {}
            name = cfg.get('kernel', path.stem)
            self._specs[name] = KernelSpec(
                name=name,
                version=str(cfg.get('version', '1.0')),
                arity=cfg['arity'],
                parameters=dict(cfg.get('parameters') or {}),
                category=meta.get('category', 'unknown'),
                description=meta.get('description', ''),
                symbol=meta.get('symbol'),
            )
        logger.info(f"Discovered {len(self._specs)} kernels in {self._config_dir}")

    @property
    def kernel_names(self) -> List[str]:
        """All discovered kernel names."""
        return list(self._specs.keys())

    def names(self, arity: Optional[str] = None, category: Optional[str] = None) -> List[str]:
        """Kernel names, optionally filtered by arity and/or category."""
        return [
            name for name, spec in self._specs.items()
            if (arity is None or spec.arity == arity)
            and (category is None or spec.category == category)
        ]

    def get_spec(self, name: str) -> KernelSpec:
        if name not in self._specs:
            raise KeyError(f"Unknown kernel: {name}. Available: {self.kernel_names}")
        return self._specs[name]

    def get_compute(self, name: str) -> Callable:
        """Get compute function for a kernel. Lazily imported."""
        if name in self._compute_cache:
            return self._compute_cache[name]

        self.get_spec(name)
        module = importlib.import_module(f'microflex.math.kernels.{name}')
        func = getattr(module, 'compute')
        self._compute_cache[name] = func
        return func

    def get_kernel(self, name: str, **params) -> Union[BinaryKernel, UnaryKernel]:
        """
        Build a kernel object. Binary kernels take no parameters; unary
        kernels start from the YAML defaults and override with params.
        """
        spec = self.get_spec(name)
        func = self.get_compute(name)

        if spec.arity == 'binary':
            if params:
                raise TypeError(f"Kernel {name!r} takes no parameters, got {sorted(params)}.")
            return FunctionKernel(func, name, spec.symbol)

        unknown = set(params) - set(spec.parameters)
        if unknown:
            raise TypeError(
                f"Unknown parameters for kernel {name!r}: {sorted(unknown)}. "
                f"Accepted: {sorted(spec.parameters)}"
            )
        return FunctionUnaryKernel(func, name, {**spec.parameters, **params})


# Module-level singleton
_registry: Optional[Registry] = None


def get_registry() -> Registry:
    """Get or create the global kernel registry."""
    global _registry
    if _registry is None:
        _registry = Registry()
    return _registry


def get_kernel(name: str, **params) -> Union[BinaryKernel, UnaryKernel]:
    """Shortcut for get_registry().get_kernel(name, **params)."""
    return get_registry().get_kernel(name, **params)


def resolve_binary(kernel) -> BinaryKernel:
    """Accept a BinaryKernel, a registry name, or a plain f(a, b) callable."""
    require(kernel, "kernel")
    if isinstance(kernel, BinaryKernel):
        return kernel
    if isinstance(kernel, str):
        resolved = get_kernel(kernel)
        if not isinstance(resolved, BinaryKernel):
            raise TypeError(f"Kernel {kernel!r} is not binary.")
        return resolved
    if callable(kernel):
        return FunctionKernel(kernel)
    raise TypeError(f"Cannot use {kernel!r} as a binary kernel.")


def resolve_unary(kernel, **params) -> UnaryKernel:
    """Accept a UnaryKernel, a registry name (with params), or a plain f(a) callable."""
    require(kernel, "kernel")
    if isinstance(kernel, UnaryKernel):
        return kernel
    if isinstance(kernel, str):
        resolved = get_kernel(kernel, **params)
        if not isinstance(resolved, UnaryKernel):
            raise TypeError(f"Kernel {kernel!r} is not unary.")
        return resolved
    if callable(kernel):
        return FunctionUnaryKernel(kernel, params=params)
    raise TypeError(f"Cannot use {kernel!r} as a unary kernel.")
