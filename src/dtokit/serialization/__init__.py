# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of DTO instances back to plain data and JSON."""

from dtokit.serialization.serializer import to_json, to_plain

__all__ = [
    "to_json",
    "to_plain",
]
