"""
Kernel layer.

`vestamm/kernels/python/` holds the integer-only arithmetic kernels (fixed
width math, share minting/burning, constant-product swaps) that the core
operations are built on.
"""
