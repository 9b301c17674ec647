from themekeeper.config.settings import ThemeSettings

__all__ = ["ThemeSettings"]
