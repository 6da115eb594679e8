# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Adapters feeding external records into hydration."""

from dtokit.adapters.model_adapter import (
    AttributeAdapter,
    ModelAdapter,
    camel_to_snake,
    from_model,
    snake_to_camel,
)

__all__ = [
    "AttributeAdapter",
    "ModelAdapter",
    "camel_to_snake",
    "from_model",
    "snake_to_camel",
]
