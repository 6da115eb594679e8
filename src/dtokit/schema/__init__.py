# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type metadata: annotation introspection and the per-class cache."""

from dtokit.schema.introspection import build_metadata, describe
from dtokit.schema.registry import TypeMetadataRegistry, default_registry, get_metadata

__all__ = [
    "TypeMetadataRegistry",
    "build_metadata",
    "default_registry",
    "describe",
    "get_metadata",
]
