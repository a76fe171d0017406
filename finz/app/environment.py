"""Explicit view environment handed from the bootstrap down the view tree.

Views never reach for globals: each one receives an ``Environment`` through
its constructor and passes it to the children it builds.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.ports import DataContextPort
from ..viewmodels.settings_vm import SettingsVM


@dataclass(frozen=True)
class Environment:
    data_context: DataContextPort
    settings: SettingsVM
