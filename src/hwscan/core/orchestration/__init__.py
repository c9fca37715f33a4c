"""
Module core.orchestration
-------------------------

This module contains the orchestration logic for the HWSCAN project.
"""

from .orchestrator import Orchestrator

__all__ = ["Orchestrator"]
