"""Runtime configuration for Aether Currents."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="AETHER_CURRENTS_", env_file=".env", extra="ignore")

    app_name: str = "aether-currents"
    log_level: str = "INFO"
    game_data_dir: str | None = Field(
        default=None,
        description="Directory holding game files extracted with their in-archive paths (bg/..., exd/...).",
    )
    territory_sheet: str = Field(
        default="exd/TerritoryType.csv",
        description="Territory sheet export, relative to game_data_dir unless absolute.",
    )
    marker_name_sheet: str = Field(
        default="exd/EObjName.csv",
        description="Event-object naming sheet export, relative to game_data_dir unless absolute.",
    )
    place_name_sheet: str = Field(
        default="exd/PlaceName.csv",
        description="Place name sheet export used to resolve territory display names when present.",
    )
    marker_label: str = "aether current"
    field_intended_use: int = 1
    scene_event_file: str = "planevent.lgb"
    marker_radius: int = Field(default=3, ge=0)
    marker_color: str = "red"
    index_workers: int = Field(default=1, ge=1)


settings = Settings()
