

class TitanicDashError(Exception):
    """Base exception for all titanic_dash errors"""
    pass

class ConfigError(TitanicDashError):
    """Invalid or inconsistent global.json"""
    pass

class TableLoadError(TitanicDashError):
    """
    The tabular source could not be read:
    missing file, unreadable bytes, no header row, etc
    """
    pass
