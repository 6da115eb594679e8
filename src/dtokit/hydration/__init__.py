# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Hydration engine: descriptor resolution, casts and DTO construction."""

from dtokit.hydration.casts import apply_cast
from dtokit.hydration.hydrator import Hydrator, from_plain, hydrate, populate
from dtokit.hydration.resolution import accepts_as_is, coerce_scalar, resolve, resolve_enum

__all__ = [
    "Hydrator",
    "accepts_as_is",
    "apply_cast",
    "coerce_scalar",
    "from_plain",
    "hydrate",
    "populate",
    "resolve",
    "resolve_enum",
]
