"""Configuration system for wlim, read from the environment (and a .env file)."""

from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class FlatEnvConfig(BaseSettings):
	"""All environment variables in a flat namespace."""

	model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', case_sensitive=True, extra='allow')

	# Logging
	WLIM_LOGGING_LEVEL: str = Field(default='info')

	# Compositor IPC
	HYPRLAND_INSTANCE_SIGNATURE: str | None = Field(default=None)
	XDG_RUNTIME_DIR: str | None = Field(default=None)

	# Tree walk bounds
	WLIM_MAX_DEPTH: int = Field(default=30)
	WLIM_MAX_TARGETS: int = Field(default=1024)

	# Deduplication
	WLIM_DEDUP_RADIUS: int = Field(default=4)
	WLIM_DEDUP_WINDOW: int = Field(default=10)

	# Geometry repair
	WLIM_BROKEN_ZERO_RATIO: float = Field(default=0.8)
	WLIM_WINDOW_RELATIVE_RATIO: float = Field(default=0.8)
	WLIM_GRID_MARGIN: int = Field(default=30)
	WLIM_ANCHOR_INSET_X: int = Field(default=16)
	WLIM_ANCHOR_INSET_Y: int = Field(default=8)
	WLIM_TITLE_PREFIX_MIN: int = Field(default=10)
	WLIM_TITLE_COMMON_MIN: int = Field(default=20)

	# Interactive session
	WLIM_MAX_TYPED: int = Field(default=8)
	WLIM_SETTLE_DELAY: float = Field(default=0.15)


class HintSettings(BaseModel):
	"""Heuristic knobs for discovery and selection, with the documented defaults."""

	model_config = ConfigDict(extra='forbid', frozen=True)

	max_depth: int = Field(default=30, ge=0, description='Deepest tree level still descended into')
	max_targets: int = Field(default=1024, gt=0, description='Collection stops admitting candidates past this count')
	dedup_radius: int = Field(default=4, ge=0, description='Max per-axis delta for two candidates to count as one')
	dedup_window: int = Field(default=10, ge=0, description='How many recent candidates the duplicate test looks back over')
	broken_zero_ratio: float = Field(default=0.8, ge=0.0, le=1.0)
	window_relative_ratio: float = Field(default=0.8, ge=0.0, le=1.0)
	grid_margin: int = Field(default=30, ge=0, description='Inset of the synthetic grid from the window edges')
	anchor_inset: tuple[int, int] = Field(default=(16, 8), description='Label offset from the element top-left corner')
	title_prefix_min: int = Field(default=10, description='Equal leading run must exceed this when one title prefixes the other')
	title_common_min: int = Field(default=20, description='Shared leading run that is always enough for a title match')
	max_typed: int = Field(default=8, gt=0, description='Longest prefix the matcher will accumulate')
	settle_delay: float = Field(default=0.15, ge=0.0, description='Seconds between overlay teardown and the click')

	@classmethod
	def from_env(cls, env: FlatEnvConfig | None = None) -> 'HintSettings':
		env = env or FlatEnvConfig()
		return cls(
			max_depth=env.WLIM_MAX_DEPTH,
			max_targets=env.WLIM_MAX_TARGETS,
			dedup_radius=env.WLIM_DEDUP_RADIUS,
			dedup_window=env.WLIM_DEDUP_WINDOW,
			broken_zero_ratio=env.WLIM_BROKEN_ZERO_RATIO,
			window_relative_ratio=env.WLIM_WINDOW_RELATIVE_RATIO,
			grid_margin=env.WLIM_GRID_MARGIN,
			anchor_inset=(env.WLIM_ANCHOR_INSET_X, env.WLIM_ANCHOR_INSET_Y),
			title_prefix_min=env.WLIM_TITLE_PREFIX_MIN,
			title_common_min=env.WLIM_TITLE_COMMON_MIN,
			max_typed=env.WLIM_MAX_TYPED,
			settle_delay=env.WLIM_SETTLE_DELAY,
		)


class Config:
	"""Lazy view over the environment; every attribute access re-reads it so tests can monkeypatch os.environ."""

	def __getattr__(self, name: str) -> Any:
		env_config = FlatEnvConfig()
		if hasattr(env_config, name):
			return getattr(env_config, name)
		raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

	@property
	def hints(self) -> HintSettings:
		return HintSettings.from_env(FlatEnvConfig())


CONFIG = Config()
