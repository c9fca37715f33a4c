"""
Module hwscan.core.configuration.base_config
--------------------------------------------

This module defines `BaseConfigModel`, shared by the hardware snapshot records
and the runtime settings. Every subclass validates through Pydantic and
serializes to the JSON shape that export and the HTTP API publish.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseConfigModel(ABC, BaseModel):
    """
    Abstract base for HWSCAN records and settings.

    Unknown keys are rejected so that a typo in a YAML file surfaces as a
    configuration error, and string values are trimmed as they come from
    pseudo-files and tool output with trailing newlines.

    Attributes:
        model_config (ConfigDict): Pydantic model configuration with rules.
    """

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown keys
        populate_by_name=True,  # Allow using attribute names as keys
        str_strip_whitespace=True,  # Trim values read from sysfs and tools
    )

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """
        Dump the model to JSON-compatible Python types.

        Returns:
            dict: Field names mapped to plain values.
        """
        return self.model_dump(mode="json")

    @abstractmethod
    def to_json(self, indent: int | None = None) -> str:
        """
        Dump the model to a JSON document.

        Args:
            indent (int | None): Indentation width, compact output if None.

        Returns:
            str: The serialized model.
        """
        return self.model_dump_json(indent=indent)
