from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Mapping, Optional

from ..utils.logging import env_requests_debug


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    export_dir: str = "."
    currency_symbol: str = "€"
    window_geometry: str = "1100x720"
    statistics_months: int = 12


def _default_debug_logging() -> bool:
    return env_requests_debug()


class SettingsVM:
    """Keeps app settings UI state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def export_dir(self) -> str:
        return self.config.export_dir

    @export_dir.setter
    def export_dir(self, value: str) -> None:
        self.config = replace(self.config, export_dir=self._coerce_dir(value))

    @property
    def currency_symbol(self) -> str:
        return self.config.currency_symbol

    @currency_symbol.setter
    def currency_symbol(self, value: str) -> None:
        self.config = replace(self.config, currency_symbol=self._coerce_optional_str(value))

    @property
    def window_geometry(self) -> str:
        return self.config.window_geometry

    @window_geometry.setter
    def window_geometry(self, value: str) -> None:
        self.config = replace(self.config, window_geometry=self._coerce_geometry(value))

    @property
    def statistics_months(self) -> int:
        return self.config.statistics_months

    @statistics_months.setter
    def statistics_months(self, value: int) -> None:
        coerced = self._coerce_int("statistics_months", value, allow_negative=False)
        self.config = replace(self.config, statistics_months=coerced)

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        return self.statistics_months >= 0 and bool(self.window_geometry)

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_flat_keys = {*SettingsConfig.__annotations__.keys(), "debug_logging"}
        unknown = set(payload.keys()) - allowed_flat_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates = {}
        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])

        if updates:
            self.config = replace(self.config, **updates)

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def set_export_dir(self, path: str) -> None:
        self.export_dir = path

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "export_dir":
            return self._coerce_dir(raw)
        if key == "currency_symbol":
            return self._coerce_optional_str(raw)
        if key == "window_geometry":
            return self._coerce_geometry(raw)
        if key == "statistics_months":
            return self._coerce_int(key, raw, allow_negative=False)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_dir(value: Any) -> str:
        if value is None:
            return "."
        if not isinstance(value, str):
            raise ValueError("export_dir must be a string path.")
        return value.strip() or "."

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_geometry(value: Any) -> str:
        text = SettingsVM._coerce_optional_str(value)
        return text or SettingsConfig.window_geometry

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, allow_negative: bool = True) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if not allow_negative and coerced < 0:
            raise ValueError(f"{name} must be non-negative.")
        return coerced


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()
