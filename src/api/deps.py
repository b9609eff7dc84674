from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.render.mpl_renderer import MatplotlibSwatchRenderer
from src.rules.loader import default_rules_path, load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path.cwd()
        self.rules_path = default_rules_path(self.base_dir)


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Adapters ---
@lru_cache
def get_renderer() -> MatplotlibSwatchRenderer:
    return MatplotlibSwatchRenderer()
