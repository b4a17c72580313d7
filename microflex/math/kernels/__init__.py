"""Concrete kernels. Each module exposes compute(); see kernel_configs/ for metadata."""
