# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from enum import Enum
from typing import Union


class SerializerFormat(Enum):
    """Output format for serializers."""

    CSV = "csv"
    JSON = "json"
    JSON_PRETTY = "json_pretty"


def format_value(value: Union[float, int, bool]) -> str:
    """Render one metric value: booleans as true/false, floats to 2 places."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return f"{value:.2f}"
