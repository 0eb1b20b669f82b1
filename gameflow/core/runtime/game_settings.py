"""
game_settings.py
----------------
Centralized constants for the flow runtime.
"""


# ===========================================================
# Timing
# ===========================================================

class Timing:
    """Scheduler tick configuration."""
    FPS: int = 60
    UPDATE_RATE: int = 60
    FIXED_DT: float = 1 / UPDATE_RATE
    MAX_FRAME_TIME: float = 0.1


# ===========================================================
# Window
# ===========================================================

class Window:
    """Host window used to receive focus and quit events."""
    WIDTH: int = 640
    HEIGHT: int = 360
    CAPTION: str = "gameflow"


# ===========================================================
# Flow Defaults
# ===========================================================

class Flow:
    """Defaults for the standard game flow."""
    SPLASH_DELAY: float = 2.0
    BASE_SCENE: str = "Boot"
    CONFIG_FILE: str = "flow.json"

    # View names handed to the notifier
    VIEW_SPLASH: str = "SplashScreen"
    VIEW_MAIN_MENU: str = "MainMenu"
    VIEW_LEVEL_SELECT: str = "LevelSelectionScreen"
    VIEW_HUD: str = "Hud"
    VIEW_LEVEL_COMPLETE: str = "LevelCompleteScreen"
    VIEW_GAME_OVER: str = "GameoverScreen"
    VIEW_PAUSE_MENU: str = "PauseMenu"

    MENU_MUSIC: str = "MenuMusic"
