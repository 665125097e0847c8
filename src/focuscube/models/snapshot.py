"""Persisted snapshot models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from focuscube.models.enums import CaseMaterial, Mode
from focuscube.models.settings import ModeSettings

SNAPSHOT_VERSION = 0

DEFAULT_STORAGE_KEY = "smart-focus-cube-storage-v2"


class PersistedSnapshot(BaseModel):
    """The durable subset of store state.

    Serialized by alias, giving the wire keys caseColor, caseMaterial,
    modes, customModeName and currentMode.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    case_color: str
    case_material: CaseMaterial
    modes: dict[Mode, ModeSettings]
    custom_mode_name: str
    current_mode: Mode

    def to_json(self) -> str:
        """Serialize wrapped in a SnapshotEnvelope."""
        envelope = SnapshotEnvelope(state=self.model_dump(mode="json", by_alias=True))
        return envelope.model_dump_json()


class SnapshotEnvelope(BaseModel):
    """Outer record stored under the snapshot key: {"state": {...}, "version": 0}."""

    state: dict[str, Any] = Field(default_factory=dict)
    version: int = SNAPSHOT_VERSION
