"""Hardware catalog and case configuration models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from focuscube.models.color import normalize_hex
from focuscube.models.enums import CaseMaterial


class ProductColor(BaseModel):
    """A named color from the official product palette."""

    model_config = ConfigDict(frozen=True)

    name: str
    hex: str


class Part(BaseModel):
    """A physical component of the cube shown in the model viewer."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    mesh: str
    color_editable: bool = False


class HardwareConfig(BaseModel):
    """Physically static case attributes, independent of the active mode."""

    model_config = ConfigDict(frozen=True)

    case_color: str = Field(description="Case color as '#RRGGBB'")
    case_material: CaseMaterial = CaseMaterial.MATTE

    @field_validator("case_color")
    @classmethod
    def validate_case_color(cls, v: str) -> str:
        return normalize_hex(v)
